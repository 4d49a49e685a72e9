# Mark services as a package and expose the modules routes and tests patch.

from . import symptom_analysis as symptom_analysis  # noqa: F401
from . import taxonomy as taxonomy  # noqa: F401

__all__ = [
    "symptom_analysis",
    "taxonomy",
]
