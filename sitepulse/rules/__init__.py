from .loader import load_rules
from .models import TrackingRules

__all__ = ["TrackingRules", "load_rules"]
