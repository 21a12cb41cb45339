"""OrientAll application bootstrap, configuration and logging."""
