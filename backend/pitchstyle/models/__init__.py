# Import all models so SQLModel.metadata registers them.
from pitchstyle.models.base import BaseUUIDModel  # noqa: F401
from pitchstyle.models.deck import PitchDeck, SlideRecord  # noqa: F401
