"""NiceGUI browser runtime for the SQL console."""
