# Models package: import all models here so create_all() sees every table.

from tarhal.models.country import Country  # noqa: F401
from tarhal.models.province import Province  # noqa: F401
from tarhal.models.city import City  # noqa: F401
from tarhal.models.destination import Destination  # noqa: F401
from tarhal.models.event import Event  # noqa: F401
from tarhal.models.travel_office import TravelOffice  # noqa: F401
from tarhal.models.travel_offer import TravelOffer  # noqa: F401
from tarhal.models.payment import Payment  # noqa: F401
from tarhal.models.stripe_event import StripeEvent  # noqa: F401
from tarhal.models.audit import AuditLog  # noqa: F401
from tarhal.models.user import User  # noqa: F401
