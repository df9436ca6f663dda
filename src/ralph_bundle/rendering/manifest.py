"""prd.json serialization."""

from ..models import Prd


def serialize_prd(prd: Prd) -> str:
    """Serialize a PRD with camelCase keys and 2-space indentation.

    Key order follows the model's field order, so output is stable.
    """
    return prd.model_dump_json(by_alias=True, indent=2) + "\n"


def parse_prd(text: str) -> Prd:
    """Parse prd.json text back into a Prd.

    Raises:
        pydantic.ValidationError: If the text is not a valid PRD document.
    """
    return Prd.model_validate_json(text)
