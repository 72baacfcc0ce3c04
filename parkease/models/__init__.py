# ParkEase core: database models
# Import all models here for SQLAlchemy discovery

from parkease.models.location import Location                 # noqa
from parkease.models.occupancy_record import OccupancyRecord  # noqa
from parkease.models.rate_setting import RateSetting          # noqa
