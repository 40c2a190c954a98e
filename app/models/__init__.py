# RM Parking database models
# Import all models here for SQLAlchemy discovery

from app.models.site import Site                        # noqa
from app.models.tariff import Tariff                    # noqa
from app.models.vehicle import Vehicle                  # noqa
from app.models.ticket import Ticket, TicketExit        # noqa
from app.models.user import User                        # noqa
from app.models.contract import Contract                # noqa
from app.models.contract_alert import ContractAlert     # noqa
