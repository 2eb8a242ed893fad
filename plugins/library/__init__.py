"""Client commands: server status and the game library."""
