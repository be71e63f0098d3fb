from .db import db
from .slot import Slot, SLOT_FREE, SLOT_BOOKED
from .booking import Booking
from .canceled_booking import CanceledBooking
from .user import User, ROLES, ROLE_ADMIN, ROLE_USER
from .rate_limit_window import RateLimitWindow
