"""
Tanita Viewer v1.0.0

Desktop viewer for Tanita body-composition scale exports.

Reads the paired ``SYSTEM/PROF{N}.CSV`` and ``DATA/DATA{N}.CSV`` files
written by the scale, decodes their tagged ``KEY,VALUE,...`` lines and
shows one tab per user with a profile header, a measurement table and
a weight / fat / muscle trend chart.
"""

APP_NAME = "Tanita Viewer"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION
