"""Application DTOs."""

from mynet.application.dtos.principal import Principal

__all__ = ["Principal"]
