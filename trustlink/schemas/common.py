from typing import Annotated

from pydantic import AfterValidator
from pydantic.networks import validate_email


def _checked_email(value: str) -> str:
    # format check only; contact matching compares the address exactly as sent
    validate_email(value)
    return value


RawEmail = Annotated[str, AfterValidator(_checked_email)]
