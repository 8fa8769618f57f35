"""
Session resolver: reading the persisted user record.
"""

from urllib.parse import quote

import pytest

from app.services.session import (
    NoSession,
    Role,
    Session,
    decode_record,
    encode_record,
    has_stored_record,
    resolve_session,
)


class TestRoleParsing:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("admin", Role.ADMIN),
            ("influencer", Role.INFLUENCER),
            ("guest", Role.OTHER),
            ("ADMIN", Role.OTHER),
            (None, Role.OTHER),
            (42, Role.OTHER),
        ],
    )
    def test_parse(self, value, expected):
        assert Role.parse(value) is expected


class TestResolveSession:

    def test_missing_record_is_no_session(self):
        assert resolve_session(None) is NoSession
        assert resolve_session("") is NoSession

    def test_admin_record(self):
        user = {"id": "admin", "name": "スピークチーム", "role": "admin"}
        result = resolve_session(encode_record(user))

        assert isinstance(result, Session)
        assert result.role is Role.ADMIN
        assert result.user == user
        assert result.authenticated

    def test_record_without_role_is_other(self):
        result = resolve_session(encode_record({"id": "u1"}))
        assert isinstance(result, Session)
        assert result.role is Role.OTHER

    @pytest.mark.parametrize("raw", ["not json", quote("[1, 2]"), quote('"admin"'), "%7B%22id%22"])
    def test_malformed_record_is_no_session(self, raw):
        assert resolve_session(raw) is NoSession

    def test_no_session_is_falsy(self):
        assert not NoSession


class TestStoredRecord:

    def test_any_value_counts(self):
        assert has_stored_record("garbage")
        assert has_stored_record(encode_record({"role": "guest"}))

    def test_empty_values_do_not(self):
        assert not has_stored_record(None)
        assert not has_stored_record("")
        assert not has_stored_record("   ")


class TestCookieCodec:

    def test_encoded_value_is_cookie_safe(self):
        raw = encode_record({"name": "山田, \"太郎\"; x", "role": "influencer"})
        assert all(ch not in raw for ch in ' ",;\\')

    def test_decode_rejects_non_objects(self):
        assert decode_record(quote("null")) is None
        assert decode_record(None) is None
