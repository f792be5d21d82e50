from .setup_token import SetupToken
from .pending_setup import PendingSetup
from .pending_email import PendingEmail
from .contact_token import ContactToken
