"""ethtx test suite."""
