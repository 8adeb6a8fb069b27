"""Message button keyboards."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ActionType(IntEnum):
    """What a button does when pressed."""

    URL = 0
    CALLBACK = 1
    AT_BOT = 2


class PermissionType(IntEnum):
    """Who may press a button."""

    SPECIFY_USER_IDS = 0
    MANAGER = 1
    ALL = 2
    SPECIFY_ROLE_IDS = 3


class _AutoId:
    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._value += 1
            return str(self._value)

    def reset(self) -> None:
        with self._lock:
            self._value = 0


_AUTO_ID = _AutoId()


def reset_auto_id() -> None:
    """Restart button numbering from one."""
    _AUTO_ID.reset()


def _compact(pairs: dict[str, Any]) -> dict[str, Any]:
    """Drop empty values, as the wire format omits them."""
    return {key: value for key, value in pairs.items() if value}


def _as_enum(enum_cls: type[IntEnum], value: int) -> int:
    try:
        return enum_cls(value)
    except ValueError:
        return int(value)


@dataclass
class Permission:
    type: int = PermissionType.SPECIFY_USER_IDS
    specify_role_ids: list[str] = field(default_factory=list)
    specify_user_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "type": int(self.type),
                "specify_role_ids": list(self.specify_role_ids),
                "specify_user_ids": list(self.specify_user_ids),
            }
        )


@dataclass
class Action:
    type: int = ActionType.URL
    permission: Permission | None = None
    unsupport_tips: str = ""
    data: str = ""
    reply: bool = False
    enter: bool = False
    at_bot_show_channel_list: bool = False

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "type": int(self.type),
                "permission": self.permission.to_dict() if self.permission else None,
                "unsupport_tips": self.unsupport_tips,
                "data": self.data,
                "reply": self.reply,
                "enter": self.enter,
                "at_bot_show_channel_list": self.at_bot_show_channel_list,
            }
        )


@dataclass
class RenderData:
    label: str = ""
    visited_label: str = ""
    style: int = 0

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {"label": self.label, "visited_label": self.visited_label, "style": self.style}
        )


@dataclass
class Button:
    id: str = ""
    render_data: RenderData | None = None
    action: Action | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "render_data": self.render_data.to_dict() if self.render_data else None,
                "action": self.action.to_dict() if self.action else None,
            }
        )


@dataclass
class Row:
    buttons: list[Button] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _compact({"buttons": [b.to_dict() for b in self.buttons]})

    def _add(
        self,
        label: str,
        visited_label: str,
        data: str,
        style: int,
        action_type: int,
        permission_type: int,
        reply: bool,
        enter: bool,
        at_bot_show_channel_list: bool,
    ) -> Row:
        self.buttons.append(
            Button(
                id=_AUTO_ID.next(),
                render_data=RenderData(label=label, visited_label=visited_label, style=style),
                action=Action(
                    type=_as_enum(ActionType, action_type),
                    permission=Permission(type=_as_enum(PermissionType, permission_type)),
                    data=data,
                    reply=reply,
                    enter=enter,
                    at_bot_show_channel_list=at_bot_show_channel_list,
                ),
            )
        )
        return self

    def button(
        self,
        label: str,
        visited_label: str,
        data: str,
        style: int,
        action_type: int,
        permission_type: int,
        reply: bool,
        enter: bool,
        at_bot_show_channel_list: bool,
    ) -> Row:
        """Add a fully configurable button."""
        return self._add(
            label, visited_label, data, style, action_type, permission_type,
            reply, enter, at_bot_show_channel_list,
        )

    def text_button(self, label: str, visited_label: str, data: str, reply: bool, enter: bool) -> Row:
        """Add a text button anyone may press."""
        return self._add(
            label, visited_label, data, 0, ActionType.AT_BOT, PermissionType.ALL, reply, enter, False
        )

    def text_button_admin(
        self, label: str, visited_label: str, data: str, reply: bool, enter: bool
    ) -> Row:
        """Add a text button only managers may press."""
        return self._add(
            label, visited_label, data, 0, ActionType.AT_BOT, PermissionType.MANAGER,
            reply, enter, False,
        )

    def url_button(self, label: str, visited_label: str, url: str, reply: bool, enter: bool) -> Row:
        """Add a link button anyone may press."""
        return self._add(
            label, visited_label, url, 0, ActionType.URL, PermissionType.ALL, reply, enter, False
        )

    def url_button_admin(
        self, label: str, visited_label: str, url: str, reply: bool, enter: bool
    ) -> Row:
        """Add a link button only managers may press."""
        return self._add(
            label, visited_label, url, 0, ActionType.URL, PermissionType.MANAGER,
            reply, enter, False,
        )


@dataclass
class CustomKeyboard:
    rows: list[Row] = field(default_factory=list)

    def row(self, row: Row) -> CustomKeyboard:
        """Append a row and return the keyboard."""
        self.rows.append(row)
        return self

    def reset_auto_id(self) -> None:
        """Restart button numbering from one."""
        reset_auto_id()

    def to_dict(self) -> dict[str, Any]:
        return _compact({"rows": [r.to_dict() for r in self.rows]})


@dataclass
class MessageKeyboard:
    id: str = ""
    content: CustomKeyboard | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {"id": self.id, "content": self.content.to_dict() if self.content else None}
        )


def new_row() -> Row:
    """Create an empty row."""
    return Row()


def new_keyboard() -> CustomKeyboard:
    """Create an empty keyboard."""
    return CustomKeyboard()