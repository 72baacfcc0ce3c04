# ParkEase core: slot occupancy and billing engine

__version__ = "1.0.0"
