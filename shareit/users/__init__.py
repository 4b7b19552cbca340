from shareit.users.models import User as User


__all__ = ['User']
