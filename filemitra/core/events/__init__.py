"""Observer channel used to publish upload state to rendering layers."""
from .event_emitter import EventEmitter

__all__ = ['EventEmitter']
