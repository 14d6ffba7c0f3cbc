"""Demo programs built on bunnyfont."""
