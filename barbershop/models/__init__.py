from .tables import Base, Users, Services, Appointments, Waitlist

__all__ = ["Base", "Users", "Services", "Appointments", "Waitlist"]
