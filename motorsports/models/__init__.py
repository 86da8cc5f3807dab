# Models package
from motorsports.models.user import User, UserRole
from motorsports.models.driver import Driver
from motorsports.models.vehicle import Vehicle
from motorsports.models.event import Event, EventType, EventStatus
from motorsports.models.setup_sheet import SetupSheet, SessionType, DownforceLevel
from motorsports.models.lap_time import LapTime, LapSessionType
from motorsports.models.part import Part, PartCategory, PartUnit
from motorsports.models.upload import Upload, UploadEntityType, FileCategory
