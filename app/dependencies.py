from .errors import InvalidArgument


def parse_id(value: str, label: str = "id") -> int:
    """Parse a record identifier from a path segment, rejecting malformed ones."""
    if not (value.isascii() and value.isdigit()) or int(value) < 1:
        raise InvalidArgument(f"Invalid {label}", error=f"'{value}' is not a valid identifier")
    return int(value)


async def get_challenge_id(id: str) -> int:
    """Validated challenge identifier from the `{id}` path parameter."""
    return parse_id(id, "challenge id")


async def get_link_id(link_id: str) -> int:
    """Validated user-challenge identifier from the `{link_id}` path parameter."""
    return parse_id(link_id, "user challenge id")
