"""
runtime settings shared by every stream.

the only global state in the package: the random generator used by shuffling
and sampling, and how strings are collated by the general comparator.
"""
import logging
import random
from dataclasses import dataclass, asdict
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    seed: Optional[int] = None
    # compare strings with locale.strcoll instead of plain code point order
    locale_collation: bool = True


settings = Settings()
_rng = random.Random()


def configure(**changes) -> Settings:
    """update settings in place. passing seed reseeds the shared generator."""
    for name, value in changes.items():
        if not hasattr(settings, name):
            raise ValueError(f"unknown setting '{name}'")
        setattr(settings, name, value)
    if 'seed' in changes:
        _rng.seed(settings.seed)
    logger.debug("settings: %s", asdict(settings))
    return settings


def get_random() -> random.Random:
    return _rng
