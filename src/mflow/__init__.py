"""mflow - Lane-based process flow tables.

Converts terse ``.mfw`` flow descriptions (work steps moving across named
lanes) into HTML tables with arrows connecting the steps.
"""

__version__ = "1.0.0"
