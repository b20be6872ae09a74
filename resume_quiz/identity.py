import jwt
from pydantic import ValidationError
from resume_quiz.models import Identity


class IdentityError(ValueError):
    """Raised when an identity token cannot be decoded."""


def decode_identity_token(token: str) -> Identity:
    """Read the display fields from a sign-in identity token.

    The signature is not checked: the fields are only used for display and
    for tagging leaderboard submissions.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
        return Identity.model_validate(claims)
    except jwt.PyJWTError as e:
        raise IdentityError(f"Invalid identity token: {e}") from e
    except ValidationError as e:
        raise IdentityError("Identity token has no email claim") from e
