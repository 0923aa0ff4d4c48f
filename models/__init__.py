from .user import User
from .catalog import Mode, Store, Category, Product
from .user_history import Action, UserHistory
