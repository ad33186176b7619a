"""Physical constants and model defaults used throughout ThermoSim.

Base units: pressure in kPa, temperature in °C, energy in kJ/kg,
specific volume in m³/kg, entropy in kJ/(kg·K).
"""

# Universal constants
R_UNIVERSAL = 8.31446261815324  # kJ/(kmol·K)

# Atmospheric
P_ATM_KPA = 101.325  # kPa, standard atmosphere

# Thermodynamic
T_CELSIUS_OFFSET = 273.15  # K

# Model defaults
CP_VAPOR = 2.0  # kJ/(kg·K), superheated steam
BRAYTON_P_LOW = 100.0  # kPa, Brayton compressor inlet


def c_to_k(T_c: float) -> float:
    """Convert a temperature in °C to Kelvin."""
    return T_c + T_CELSIUS_OFFSET


def k_to_c(T_k: float) -> float:
    """Convert a temperature in Kelvin to °C."""
    return T_k - T_CELSIUS_OFFSET

# Specific heats for simple sensible-heating estimates [kJ/(kg·K)]
SPECIFIC_HEATS = {
    "water": 4.184,
    "copper": 0.385,
    "air": 1.005,
}
