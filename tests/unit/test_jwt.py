"""Unit tests for bearer token identity."""

from datetime import timedelta

from jose import jwt

from collateral.kernel.identity.jwt import JWTManager


SECRET = "unit-test-secret-key-with-enough-length"


class TestJWTManager:

    def test_subject_is_the_caller_principal(self):
        manager = JWTManager(secret_key=SECRET)
        token, expires, jti = manager.create_access_token("SP-alice")

        payload = manager.verify_access_token(token)
        assert payload is not None
        assert payload.sub == "SP-alice"
        assert payload.jti == jti
        assert payload.exp > payload.iat

    def test_expired_token_rejected(self):
        manager = JWTManager(secret_key=SECRET)
        token, _, _ = manager.create_access_token("SP-alice", expires_delta=timedelta(seconds=-5))

        assert manager.verify_access_token(token) is None

    def test_foreign_secret_rejected(self):
        token, _, _ = JWTManager(secret_key="another-secret-key-also-long-enough").create_access_token("SP-alice")

        assert JWTManager(secret_key=SECRET).verify_access_token(token) is None

    def test_non_access_token_rejected(self):
        token = jwt.encode({"sub": "SP-alice", "type": "refresh"}, SECRET, algorithm="HS256")

        assert JWTManager(secret_key=SECRET).verify_access_token(token) is None

    def test_garbage_rejected(self):
        assert JWTManager(secret_key=SECRET).verify_access_token("not.a.token") is None
