"""Reference implementations of the tps-uid interfaces."""
