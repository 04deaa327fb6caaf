import pytest

from markdown_publish.security import AuthStatus, check_api_key

SECRET = "s3cret"


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, AuthStatus.MISSING),
        ("s3cret", AuthStatus.AUTHORIZED),
        ("S3CRET", AuthStatus.INVALID),
        ("s3cret-and-more", AuthStatus.INVALID),
        ("", AuthStatus.INVALID),
        ("s3crét", AuthStatus.INVALID),
    ],
    ids=["missing", "match", "case", "longer", "empty", "non-ascii"],
)
def test_check_api_key(header, expected):
    assert check_api_key(header, SECRET) is expected


def test_non_ascii_secret_matches():
    assert check_api_key("clé-secrète", "clé-secrète") is AuthStatus.AUTHORIZED
