from homedash.errors import ValidationError

MAX_USERNAME_LENGTH = 64
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


def validate_username(username: str) -> None:
    """Validate username meets requirements.

    Requirements:
    - At most 64 characters
    - No whitespace characters

    Raises:
        ValidationError: If username doesn't meet requirements
    """
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters long")

    if any(char.isspace() for char in username):
        raise ValidationError("Username cannot contain whitespace characters")


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def validate_password(password: str) -> None:
    """Validate the password can be hashed.

    Any non-empty password fits, including spaces, up to bcrypt's 72-byte input.

    Raises:
        ValidationError: If the password is longer than 72 bytes in UTF-8
    """
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
