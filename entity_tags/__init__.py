"""Entity tag admin client and API host."""
