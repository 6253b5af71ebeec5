from .crud_booking import booking
from .crud_option import option
