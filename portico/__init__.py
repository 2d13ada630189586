"""HTTP surface for Vestibule."""
