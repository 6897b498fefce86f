"""Entities of the clinic network."""

from clinicsim.entities.bounded_queue import BoundedQueue
from clinicsim.entities.office import Office
from clinicsim.entities.patient import Patient, PatientState
from clinicsim.entities.receptionist import Receptionist

__all__ = [
    "BoundedQueue",
    "Office",
    "Patient",
    "PatientState",
    "Receptionist",
]
