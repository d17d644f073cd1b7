from abc import ABC

from app.ports.application_port import ApplicationPort
from app.ports.offering_port import OfferingPort
from app.ports.user_port import UserPort


class DatabasePort(UserPort, OfferingPort, ApplicationPort, ABC):
    """
    Aggregate port for CRUD operations against the data store.
    Inherits from domain-specific ports to strictly follow ISP.
    """
