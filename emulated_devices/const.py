"""
Konstanten für die emulierten Geräte-APIs (OpenEMS, TeslaLogger, Shelly, Ariston)
"""

# ====================================================
# SERVER KONFIGURATION
# ====================================================
SIMULATOR_HOST = "127.0.0.1"       # Nur lokal, Tests laufen auf derselben Maschine
SIMULATOR_PORT = 7072              # HTTP Port (evcc selbst läuft auf 7070)
SHUTDOWN_TIMEOUT = 1.0             # Sekunden für laufende Requests beim Beenden

# ====================================================
# STARTUP / LIFECYCLE (Test-Harness)
# ====================================================
STARTUP_TIMEOUT = 10               # Sekunden bis Simulator erreichbar sein muss
STARTUP_POLL_INTERVAL = 0.1        # Abfrageintervall beim Warten
STOP_TIMEOUT = 5                   # Sekunden bis Prozess nach Shutdown weg sein muss
REQUEST_TIMEOUT = 2                # HTTP Timeout der Steuer-Requests

# ====================================================
# STATE API
# ====================================================
STATE_PATH = "/api/state"
SHUTDOWN_PATH = "/api/shutdown"

# ====================================================
# OPENEMS (Energiesystem, REST Channels)
# ====================================================
# Pfad → Feld unter "site"
OPENEMS_CHANNELS = {
    "/rest/channel/_sum/GridActivePower": ("grid", "power"),
    "/rest/channel/_sum/ProductionActivePower": ("pv", "power"),
    "/rest/channel/_sum/EssDischargePower": ("battery", "power"),
    "/rest/channel/_sum/EssSoc": ("battery", "soc"),
}

# ====================================================
# TESLALOGGER (Fahrzeug-Telemetrie)
# ====================================================
TESLALOGGER_PREFIX = "/currentjson/"
VEHICLE_NOT_FOUND = "Vehicle not found"

# Feste Werte im Telemetrie-Datensatz
TESLALOGGER_FIXED = {
    "plugged_in": True,
    "charging": False,
    "odometer": 10000,
    "is_preconditioning": False,
    "charge_current_request": 10,
}

# ====================================================
# SHELLY (Gen2 Schalter)
# ====================================================
SHELLY_PATH = "/shelly"
SHELLY_LIST_METHODS_PATH = "/rpc/Shelly.ListMethods"
SHELLY_STATUS_PATH = "/rpc/Switch.GetStatus?id=0"
SHELLY_GENERATION = 2
SHELLY_METHODS = ["Switch.GetStatus"]

# ====================================================
# ARISTON (Warmwasser Cloud API)
# ====================================================
ARISTON_LOGIN_PATH = "/api/v2/accounts/login"
ARISTON_PLANTS_SEGMENT = "/api/v2/remote/plants/"
ARISTON_PLANT_DATA_SEGMENT = "/api/v2/velis/slpPlantData/"
ARISTON_FEATURES_MARKER = "/features"
ARISTON_BOOST_MARKER = "/boost"
ARISTON_TEMPERATURES_MARKER = "/temperatures"
ARISTON_TOKEN = "test-token"       # Login klappt immer, egal welche Credentials

# ====================================================
# STANDARD-ZUSTAND (beim Prozessstart)
# ====================================================
DEFAULT_STATE = {
    "site": {
        "grid": {"power": 0},
        "pv": {"power": 0, "energy": 0},
        "battery": {"power": 0, "soc": 0},
    },
    "loadpoints": [{"power": 0, "energy": 0, "enabled": False, "status": "A"}],
    "vehicles": [{"soc": 0, "range": 0}],
    "chargers": {
        "waterheater": {
            "boost": False,
            "comfort": 60,
            "reduced": 45,
        },
    },
}

# ====================================================
# VERSION
# ====================================================
VERSION = "v0.1.0"
VERSION_INFO = "OpenEMS, TeslaLogger, Shelly Gen2 und Ariston Velis als HTTP Test-Double"
