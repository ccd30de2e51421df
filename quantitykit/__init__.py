"""
quantitykit

Physical quantities as a value paired with a unit of measure: an exact
numeric tower with mixed-kind promotion, affine and converter-based units,
damped-search inversion for the astronomical time scales, and SI display
formatting.
"""

__version__ = "1.0.0"
__author__ = "quantitykit developers"

# Version information
VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "status": "stable"
}
