"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external formats:
- Map documents (tagged-way XML, diagram description)
- Exports (diagram description, Folium HTML maps, console listing)
"""
