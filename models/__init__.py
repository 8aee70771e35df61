# models/__init__.py

from .user import User
from .hackathon import Hackathon
from .judge import Judge
from .participation import Participation
from .score import Score
