"""Mock factories shared by the unit tests."""
