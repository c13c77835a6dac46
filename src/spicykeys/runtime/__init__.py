"""Runtime services shared by the engine (logging, tracing)."""
