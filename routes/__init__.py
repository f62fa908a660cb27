from .main import main_bp
from .events import events_bp

__all__ = ['main_bp', 'events_bp']
