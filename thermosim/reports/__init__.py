"""Report generation for ThermoSim analyses."""
