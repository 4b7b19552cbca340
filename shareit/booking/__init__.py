from shareit.booking.models import Booking as Booking


__all__ = ['Booking']
