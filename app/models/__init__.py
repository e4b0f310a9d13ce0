from .challenge import Challenge
from .user_challenge import UserChallenge
from .event import Event
from .tip import Tip

__all__ = [
    "Challenge",
    "UserChallenge",
    "Event",
    "Tip",
]
