"""Unit tests for input bounds and response shapes."""

import pytest
from pydantic import ValidationError

from collateral.kernel.errors import ErrorCode, OperationResult
from collateral.kernel.models.document import Document
from collateral.schemas.document import DocumentCreate, DocumentFields, DocumentInfo
from collateral.schemas.types import identifier_adapter


HASH = bytes(range(32))


class TestDocumentFields:

    def test_accepts_bounded_values(self):
        fields = DocumentFields(
            name="N" * 256,
            description="é" * 500,
            content_hash=HASH,
            doc_type="real-estate",
        )
        assert len(fields.description) == 500

    def test_description_counts_code_points(self):
        with pytest.raises(ValidationError):
            DocumentFields(name="deed", description="é" * 501, content_hash=HASH, doc_type="deed")

    def test_name_must_be_ascii(self):
        with pytest.raises(ValidationError):
            DocumentFields(name="Grundbuchauszug ä", content_hash=HASH, doc_type="deed")

    def test_name_length_bound(self):
        with pytest.raises(ValidationError):
            DocumentFields(name="N" * 257, content_hash=HASH, doc_type="deed")

    @pytest.mark.parametrize("size", [0, 31, 33, 64])
    def test_hash_must_be_32_bytes(self, size):
        with pytest.raises(ValidationError):
            DocumentFields(name="deed", content_hash=b"\x00" * size, doc_type="deed")


class TestIdentifiers:

    def test_max_length(self):
        assert identifier_adapter.validate_python("x" * 64) == "x" * 64
        with pytest.raises(ValidationError):
            identifier_adapter.validate_python("x" * 65)

    @pytest.mark.parametrize("value", ["", "naïve", "tab\there"])
    def test_rejects_empty_and_non_ascii(self, value):
        with pytest.raises(ValidationError):
            identifier_adapter.validate_python(value)


class TestHttpPayloads:

    def test_hex_hash_is_decoded(self):
        payload = DocumentCreate(
            document_id="d1",
            name="deed",
            content_hash=HASH.hex(),
            doc_type="deed",
        )
        assert payload.to_fields().content_hash == HASH

    def test_short_hex_hash_rejected(self):
        with pytest.raises(ValidationError):
            DocumentCreate(document_id="d1", name="deed", content_hash="ab" * 31, doc_type="deed")

    def test_non_hex_hash_rejected(self):
        with pytest.raises(ValidationError):
            DocumentCreate(document_id="d1", name="deed", content_hash="zz" * 32, doc_type="deed")

    def test_document_info_renders_hash_as_hex(self):
        document = Document(
            entity_id="e1",
            document_id="d1",
            name="deed",
            description="",
            content_hash=HASH,
            doc_type="deed",
            created_at=3,
            last_modified_at=3,
            version=1,
            active=True,
        )
        dumped = DocumentInfo.model_validate(document).model_dump(mode="json")
        assert dumped["content_hash"] == HASH.hex()


class TestOperationResult:

    def test_labels_match_public_names(self):
        assert [code.label for code in ErrorCode] == [
            "NotAuthorized",
            "EntityAlreadyExists",
            "EntityNotFound",
            "DocumentAlreadyRegistered",
            "DocumentNotFound",
            "InvalidPermissionLevel",
            "NoAccess",
        ]

    def test_success_and_failure(self):
        assert OperationResult.success(3) == OperationResult(ok=True, log_id=3)
        failure = OperationResult.failure(ErrorCode.NO_ACCESS)
        assert failure.ok is False
        assert failure.error == ErrorCode.NO_ACCESS
        assert failure.log_id is None
