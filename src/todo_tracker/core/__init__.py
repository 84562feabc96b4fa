"""Session/state containers and the ports the store depends on."""
