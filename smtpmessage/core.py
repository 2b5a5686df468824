from base64 import b64encode
from typing import Any, Dict, List, Union
import logging

logger = logging.getLogger(__name__)

BOUNDARY = "my-boundary-12345"
BASE64_LINE_LENGTH = 76

BytesLike = Union[bytes, bytearray, str]


def _to_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class SMTPMessage:
    """Builds an email message and renders it as a MIME text blob.

    Every setter mutates the message in place and returns it, so calls can
    be chained. Rendering is a pure in-memory transformation: nothing here
    opens a connection or touches the filesystem. The rendered text (or
    `as_bytes()`) is meant to be handed verbatim to a mail transport, which
    may use `auth_user` and `auth_password` to log in.

    The multipart boundary is the fixed `BOUNDARY` literal, not a random
    token. Header values and the plain body are written without escaping.

    Example:
        msg = (
            SMTPMessage()
            .set_from("me@domain.com")
            .add_recipient("user@domain.com")
            .set_subject("Report")
            .set_body("See attached.")
            .set_attachment("report.txt", b"numbers")
        )
        payload = msg.render()
    """

    def __init__(self):
        """Initializes an empty message."""
        self.sender: str | None = None
        self.recipients: List[str] = []
        self.subject = ""
        self.body = b""

        self.auth_user: str | None = None
        self.auth_password: str | None = None

        self.attachment_name = ""
        self.attachment_data = b""

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "SMTPMessage":
        """Creates a message from a plain mapping.

        Values are handed to the matching setters as they are, without any
        validation. Keys that are not listed below are ignored.

        Args:
            config (dict): Message fields with optional keys:
                - `from` (str): Sender address.
                - `to` (str | list[str]): One or more recipient addresses.
                - `subject` (str): Subject line.
                - `body` (str | bytes): Message content.
                - `auth` (dict): `username` and `password` for the transport.
                - `attachment` (dict): `filename` and `data`.

        Returns:
            SMTPMessage: The populated message.

        Example:
            SMTPMessage.from_dict({"from": "me@domain.com", "to": ["a@domain.com"], "subject": "Hi"})
        """
        message = cls()
        if "from" in config:
            message.set_from(config["from"])

        recipients = config.get("to", [])
        if isinstance(recipients, str):
            recipients = [recipients]
        for recipient in recipients:
            message.add_recipient(recipient)

        if "subject" in config:
            message.set_subject(config["subject"])
        if "body" in config:
            message.set_body(config["body"])

        auth = config.get("auth")
        if auth:
            message.set_auth(auth.get("username"), auth.get("password"))

        attachment = config.get("attachment")
        if attachment:
            message.set_attachment(attachment.get("filename", ""), attachment.get("data", b""))
        return message

    def set_from(self, address: str) -> "SMTPMessage":
        """Sets the sender address, replacing any previous one."""
        self.sender = address
        return self

    def add_recipient(self, address: str) -> "SMTPMessage":
        """Appends a recipient address.

        Recipients keep their call order and duplicates are preserved.

        Example:
            add_recipient("a@domain.com").add_recipient("b@domain.com")
        """
        self.recipients.append(address)
        return self

    def set_subject(self, text: str) -> "SMTPMessage":
        """Sets the subject. An empty subject is left out of the output."""
        self.subject = text
        return self

    def set_body(self, data: BytesLike) -> "SMTPMessage":
        """Sets the plain-text body.

        Args:
            data (bytes | str): Body content. Strings are stored as UTF-8.
        """
        self.body = _to_bytes(data)
        return self

    def set_auth(self, username: str, password: str) -> "SMTPMessage":
        """Stores credentials for the transport that sends this message.

        Credentials never appear in the rendered output.
        """
        self.auth_user = username
        self.auth_password = password
        return self

    def set_attachment(self, filename: str, data: BytesLike) -> "SMTPMessage":
        """Sets the single attachment, replacing name and data together.

        Args:
            filename (str): Name written to the part headers. Not escaped.
            data (bytes | str): Attachment content. Strings are stored as UTF-8.

        Example:
            set_attachment("file.txt", "hello")
        """
        self.attachment_name = filename
        self.attachment_data = _to_bytes(data)
        return self

    def has_attachment(self) -> bool:
        """Checks whether the message renders as multipart."""
        return self.attachment_name != ""

    def render(self) -> str:
        """Renders the message as MIME text with CRLF line endings.

        Returns:
            str: Headers followed by either the raw body or a two-part
            `multipart/mixed` body whose second part is the base64 attachment.
        """
        lines = []

        lines.append(f"To: {','.join(self.recipients)}")
        if self.subject:
            lines.append(f"Subject: {self.subject}")
        lines.append("MIME-Version: 1.0")

        body = self.body.decode("utf-8", errors="surrogateescape")

        if self.has_attachment():
            lines.append(f"Content-Type: multipart/mixed; boundary={BOUNDARY}")
            lines.append(f"\r\n--{BOUNDARY}")
            lines.append('Content-Type: text/plain; charset="utf-8"')
            lines.append(f"\r\n{body}")
            lines.append(f"\r\n--{BOUNDARY}")
            lines.append(f'Content-Type: application/octet-stream; name="{self.attachment_name}"')
            lines.append("Content-Transfer-Encoding: base64")
            lines.append(f'Content-Disposition: attachment; filename="{self.attachment_name}"')

            encoded = b64encode(self.attachment_data).decode("ascii")
            for i in range(0, len(encoded), BASE64_LINE_LENGTH):
                lines.append(encoded[i:i + BASE64_LINE_LENGTH])

            lines.append(f"\r\n--{BOUNDARY}--")
        else:
            lines.append(f"\r\n{body}")

        logger.debug(
            "Rendered message for %d recipient(s), attachment=%s",
            len(self.recipients),
            self.has_attachment(),
        )
        return "".join(line + "\r\n" for line in lines)

    def as_bytes(self) -> bytes:
        """Returns the rendered message as bytes, preserving raw body bytes."""
        return self.render().encode("utf-8", errors="surrogateescape")

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"<SMTPMessage from={self.sender!r} recipients={len(self.recipients)} "
            f"subject={self.subject!r} attachment={self.attachment_name or None!r}>"
        )
