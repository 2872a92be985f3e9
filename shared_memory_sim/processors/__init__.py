"""
Processors Module
=================

This module contains the processor record and the round-robin ring.
"""

from .processor import Processor
from .processor_ring import ProcessorRing

__all__ = ["Processor", "ProcessorRing"]
