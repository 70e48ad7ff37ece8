"""Application composition: settings, controller wiring and console entry point."""
