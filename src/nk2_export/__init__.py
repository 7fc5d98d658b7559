"""
Outlook autocomplete (NK2) decoder and contact exporter.
"""

__version__ = "0.1.0"
