"""NiceGUI dashboard application."""
