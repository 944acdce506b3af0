"""User avatar with a photo -> Gravatar -> initials fallback chain.

The Gravatar key is a 32-bit rolling hash kept for compatibility with
existing avatar URLs; it is not an identity hash and must not be used as one.
"""

from __future__ import annotations

from markupsafe import Markup

from bizdesk.ui._templates import join_classes, render

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"
AVATAR_CLASSES = (
    "relative rounded-full overflow-hidden bg-foreground/10 flex items-center "
    "justify-center"
)


def gravatar_hash(email: str) -> str:
    """Signed 32-bit ``h * 31 + byte`` over the normalized email, in hex."""
    h = 0
    for byte in email.strip().lower().encode("utf-8"):
        h = (h * 31 + byte) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(h, "x")


def gravatar_url(email: str, size: int) -> str:
    """Identicon URL at twice the display size (for high-DPI screens)."""
    return f"{GRAVATAR_BASE_URL}/{gravatar_hash(email)}?s={size * 2}&d=identicon"


def initials(display_name: str | None, email: str) -> str:
    if display_name and display_name.strip():
        names = display_name.split()
        if len(names) >= 2:
            return f"{names[0][0]}{names[-1][0]}".upper()
        return display_name.strip()[:2].upper()
    return email[:2].upper()


class Avatar:
    """Avatar state for one user.

    image_failed is set when the supplied photo fails to load and
    placeholder_failed when the Gravatar image fails; neither is ever reset.
    """

    def __init__(
        self,
        email: str,
        photo_url: str | None = None,
        display_name: str | None = None,
        size: int = 40,
        class_name: str = "",
    ) -> None:
        self.email = email
        self.photo_url = photo_url
        self.display_name = display_name
        self.size = size
        self.class_name = class_name
        self.image_failed = False
        self.placeholder_failed = False

    @property
    def placeholder_url(self) -> str:
        return gravatar_url(self.email, self.size)

    @property
    def has_placeholder(self) -> bool:
        return bool(self.email.strip())

    @property
    def showing_photo(self) -> bool:
        return bool(self.photo_url) and not self.image_failed

    @property
    def image_url(self) -> str:
        if self.showing_photo:
            return self.photo_url
        return self.placeholder_url

    @property
    def show_initials(self) -> bool:
        if self.placeholder_failed:
            return True
        return self.image_failed and not self.has_placeholder

    @property
    def initials(self) -> str:
        return initials(self.display_name, self.email)

    def on_load_error(self) -> None:
        """The current image failed to load; move one step down the chain."""
        if self.showing_photo:
            self.image_failed = True
        else:
            self.placeholder_failed = True

    def render(self) -> Markup:
        return render(
            "avatar",
            classes=join_classes(AVATAR_CLASSES, self.class_name),
            size=self.size,
            src=self.image_url,
            placeholder_url=self.placeholder_url,
            alt=self.display_name or self.email,
            initials=self.initials,
            show_initials=self.show_initials,
        )
