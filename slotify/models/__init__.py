# Slotify Database Models
# Import all models here for SQLAlchemy discovery

from slotify.models.user import User, EmployeeProfile, Role                 # noqa
from slotify.models.parking_slot import ParkingSlot, SlotType               # noqa
from slotify.models.check_in import CheckIn                                 # noqa
from slotify.models.slot_flag import SlotFlag                               # noqa
from slotify.models.password_reset_token import PasswordResetToken          # noqa
