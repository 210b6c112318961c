"""Read access to the property and credential store."""
