"""Builder for the bot's markdown message text."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

# Line breaks are sent escaped, as a backslash followed by "n".
_NL = "\\n"


def _path_escape(text: str) -> str:
    return quote(text, safe="$&+:=@")


@dataclass
class MarkDown:
    """Accumulates markdown text; every method returns the builder itself."""

    content: str = ""

    def __str__(self) -> str:
        return self.content

    def _append(self, text: str) -> MarkDown:
        self.content += text
        return self

    def mqq_api(self, content: str) -> MarkDown:
        return self._append(
            f"{_NL}[{content}](mqqapi://aio/inlinecmd?command={_path_escape(content)}"
            "&reply=false&enter=false)"
        )

    def mqq_api_auto(self, content: str) -> MarkDown:
        return self._append(
            f"{_NL}[{content}](mqqapi://aio/inlinecmd?command={_path_escape(content)}"
            "&reply=false&enter=true)"
        )

    def mqq_api_at(self, nickname: str, tiny_id: int) -> MarkDown:
        """Mention a user; only effective in markdown sent with mentions."""
        return self._append(
            f"{_NL}[@{nickname}](mqqapi://markdown/mention?at_type=1&at_tinyid={tiny_id})"
        )

    def mqq_api_at_to_profile(self, nickname: str, tiny_id: int) -> MarkDown:
        """Replace the text with a link to a user's profile card."""
        self.content = (
            f"{_NL}[@{nickname}](mqqapi://card/show_pslcard?src_type=internal&version=1"
            f"&uin={tiny_id}&crad_type=friend&source=qrcode)"
        )
        return self

    def url(self, name: str, web_url: str) -> MarkDown:
        return self._append(f"{_NL}[🔗{name}]({web_url})")

    def h1(self, content: str) -> MarkDown:
        return self._append(f"{_NL}# {content}")

    def h2(self, content: str) -> MarkDown:
        return self._append(f"{_NL}## {content}")

    def h3(self, content: str) -> MarkDown:
        return self._append(f"{_NL}### {content}")

    def delete_line(self, content: str) -> MarkDown:
        return self._append(f"~~{content}~~")

    def bold(self, content: str) -> MarkDown:
        return self._append(f"**{content}** ")

    def italic(self, content: str) -> MarkDown:
        return self._append(f"*{content}* ")

    def italic_bold(self, content: str) -> MarkDown:
        return self._append(f"***{content}*** ")

    def block_reference(self, content: str) -> MarkDown:
        return self._append(f"{_NL}> {content}{_NL}")

    def image(self, text: str, url: str, width: int, height: int) -> MarkDown:
        return self._append(f"{_NL}![{text} #{width}px #{height}px]({url})")

    def divider_line(self) -> MarkDown:
        self.content = (self.content + f"{_NL} ---{_NL}\n").strip()
        return self

    def text(self, content: str) -> MarkDown:
        return self._append(content)

    def new_line(self) -> MarkDown:
        return self._append(_NL)

    def code(self, content: str) -> MarkDown:
        escaped = content.replace("\t", "\\t").replace("\n", _NL)
        return self._append(f"{_NL}```{_NL}{escaped}{_NL}```{_NL}")