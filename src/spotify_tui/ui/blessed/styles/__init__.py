"""Colors and text formatting for the blessed UI."""
