"""SMTPMessage package initialization module.

This package builds email messages in memory and renders them as MIME
text ready to be handed to a mail transport. It covers a sender,
recipients, a subject, a plain-text body and a single base64 attachment.
It does not send anything itself.

Modules:
    core (module): Implements the message builder and MIME rendering.

Example:
    from smtpmessage import SMTPMessage

    msg = SMTPMessage().set_from("me@domain.com").add_recipient("you@domain.com")
    msg.set_subject("Hello!").set_body("This is a test email.")
    payload = msg.render()
"""

import logging

from .core import SMTPMessage, BOUNDARY, BASE64_LINE_LENGTH

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["SMTPMessage", "BOUNDARY", "BASE64_LINE_LENGTH"]
