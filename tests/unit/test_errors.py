import pytest

from mediafs.core.errors import (
    ERROR_KINDS,
    BadParameters,
    Conflict,
    MediaFileServerException,
    NotFound,
    NotImplementedOnServer,
    PathUnresolvable,
    PermissionDenied,
    ServerError,
    TransportError,
    UnknownTypeTag,
    UsageError,
    error_for_kind,
)


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("Error", ServerError),
        ("PermissionDenied", PermissionDenied),
        ("NotImplemented", NotImplementedOnServer),
        ("Conflict", Conflict),
        ("BadParameters", BadParameters),
        ("NotFound", NotFound),
        ("MFS::Error", ServerError),
        ("MFS::Error::NotFound", NotFound),
    ],
)
def test_error_for_kind(kind, expected):
    assert error_for_kind(kind) is expected


def test_non_error_tags_are_not_errors():
    assert error_for_kind("MFS::Metadata::Encoding") is None
    assert error_for_kind("MFS::Error::Bogus") is None


def test_branches_are_distinct():
    for cls in ERROR_KINDS.values():
        assert issubclass(cls, ServerError)
        assert not issubclass(cls, UsageError)

    assert issubclass(PathUnresolvable, UsageError)
    assert issubclass(UnknownTypeTag, UsageError)
    assert not issubclass(TransportError, ServerError)
    assert issubclass(TransportError, MediaFileServerException)


def test_server_error_keeps_message():
    error = Conflict("Name already taken")
    assert error.message == "Name already taken"
    assert str(error) == "Name already taken"
    assert error.kind == "Conflict"


def test_unknown_type_tag_keeps_tag():
    error = UnknownTypeTag("MFS::Nope")
    assert error.tag == "MFS::Nope"
    assert "MFS::Nope" in str(error)
