"""Infrastructure — diagnostic logging setup and the log sink registry."""
