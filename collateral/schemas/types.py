"""
Bounded input types shared by the kernel and the API.
"""

from typing import Annotated

from pydantic import AfterValidator, Field, StringConstraints, TypeAdapter

from collateral.kernel.models.document import CONTENT_HASH_SIZE


def _require_ascii(value: str) -> str:
    if not value.isascii() or not value.isprintable():
        raise ValueError("must contain printable ASCII characters only")
    return value


# Entity ids, document ids and document types
Identifier = Annotated[
    str,
    StringConstraints(min_length=1, max_length=64),
    AfterValidator(_require_ascii),
]

AsciiName = Annotated[
    str,
    StringConstraints(max_length=256),
    AfterValidator(_require_ascii),
]

# Length counts code points
UnicodeText = Annotated[str, StringConstraints(max_length=500)]

Principal = Annotated[str, StringConstraints(min_length=1, max_length=128)]

ContentHash = Annotated[bytes, Field(min_length=CONTENT_HASH_SIZE, max_length=CONTENT_HASH_SIZE)]

identifier_adapter = TypeAdapter(Identifier)
ascii_name_adapter = TypeAdapter(AsciiName)
principal_adapter = TypeAdapter(Principal)
