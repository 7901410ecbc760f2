"""SensorHub — HTTP API for IoT sensor readings and device-bound accounts.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
