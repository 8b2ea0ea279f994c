"""NiceGUI operator dashboard."""
