STORAGE_KEY = "forecasty-data"

DEFAULT_HORIZON = 6
# Ten years of monthly steps
MAX_HORIZON = 120
DEFAULT_WINDOW = 3

# Fewest observations the orchestrator accepts
MIN_FORECAST_POINTS = 2

PREDICTION_DECIMALS = 4

# 12-month series trending from ~0 to 5000
SAMPLE_SERIES = [
    {"date": "2024-09-01", "value": 0},
    {"date": "2024-10-01", "value": 50},
    {"date": "2024-11-01", "value": 150},
    {"date": "2024-12-01", "value": 350},
    {"date": "2025-01-01", "value": 700},
    {"date": "2025-02-01", "value": 1200},
    {"date": "2025-03-01", "value": 1800},
    {"date": "2025-04-01", "value": 2600},
    {"date": "2025-05-01", "value": 3400},
    {"date": "2025-06-01", "value": 4100},
    {"date": "2025-07-01", "value": 4700},
    {"date": "2025-08-01", "value": 5000},
]
