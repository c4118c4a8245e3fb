"""Shared Kernel module.

Foundational components shared by every bounded context. Changes here affect
all contexts and should be carefully coordinated.
"""

from shared_kernel.observability_context import ObservationContext

__all__ = ["ObservationContext"]
