# lagrange_sdk

A toolkit for writing QQ bots against a OneBot-style endpoint. Events arrive
over a WebSocket and are handed to the callbacks you register by event name.
Calls to the bot's HTTP API are made through a chained request builder.

## Quick start

```python
import asyncio

from lagrange_sdk.builder import api
from lagrange_sdk.core import Core
from lagrange_sdk.event_message import EVENT_GROUP_MSG

core = Core("ws://127.0.0.1:3001", 10000)


async def ping(event):
    texts = event.message.texts()
    if texts and texts[0] == "ping":
        await api("http://127.0.0.1:3000").send_group_msg(event.message.group_id).text("pong").do()


core.on(EVENT_GROUP_MSG, ping)
asyncio.run(core.listen_and_wait())
```

## Receiving events: `lagrange_sdk.core`

- `Core(api, bot_qq, max_retry_count=10)` connects to `ws://<host:port of api>/ws`.
- `Core.on(event, callback)` registers a callback under an event name. The
  name may be a string or a string enum. A callback receives the parsed
  `Event` and may be a plain function or a coroutine function.
- `Core.dispatch(raw)` parses one frame and runs the callbacks registered
  under its name, in the order they were registered. It returns the `Event`,
  or `None` when the frame cannot be parsed. If a callback raises, the
  remaining callbacks for that frame are skipped. The exception goes to the
  function set with `Core.set_panic_handler(handler)`, or is logged when no
  handler is set.
- `Core.listen_and_wait()` receives frames until the task is cancelled. Each
  frame is dispatched in its own task. When the connection fails, the method
  waits `n` seconds before reconnect attempt `n`. After a successful
  connection the attempt count starts again from zero. Once more than
  `max_retry_count` attempts in a row have failed, the last error is raised.

## Events: `lagrange_sdk.events`

`parse_event(data)` decodes one frame into an `Event`. It raises `ValueError`
when the frame is malformed. `Event.name` is the key that callbacks are
looked up by:

- For messages it is the message type, `"group"` or `"private"`
  (`EVENT_GROUP_MSG`, `EVENT_PRIVATE_MSG`).
- For notices and requests it is the sub-type, or the notice or request
  type when there is no sub-type.
- For meta events it is the meta event type (`"lifecycle"`, `"heartbeat"`).

The parsed parts are:

- `Event.message`: an `EventMessage` (`lagrange_sdk.event_message`). It
  offers `texts()`, `types()`, `files()`, `urls()`, `qqs()`, `ids()`,
  `data()`, `at_qqs()`, `at_bot(bot_qq)`, `is_from_bot(bot_qq)` and
  `display_card()`.
- `Event.notice`: an `EventNotice` (`lagrange_sdk.event_notice`). Its
  `notice_type` is a `NoticeType` member when the value is known. An upload
  carries a `File`.
- `Event.request`: an `EventRequest` (`lagrange_sdk.event_request`), with
  `request_type`, `comment` and `flag`.
- `Event.meta`: a `MetaEvent` (`lagrange_sdk.meta_event`). `interval` is
  given in milliseconds.
- `Event.status`: an `EventStatus`, filled when the frame has `"status": "ok"`.

## Calling the API: `lagrange_sdk.builder`

`api(url)` returns a `Builder`. You can also create `Builder(url, client)`
with an `httpx.AsyncClient` of your own. Each chain step returns the builder.

- Messages: `send_group_msg(group_id)`, `send_private_msg(user_id)`,
  `send_reply(msg_id)`, `text`, `image`, `image_base64`, `face`, `json`,
  `long_msg`, `message_data(segments)`.
- Group management: `set_group_ban().to_group_and_mute_user(g, u).duration(s)`,
  `set_group_kick().to_group_and_kick_user(g, u)`,
  `poke().set_group_poke(g, u)`,
  `get_group_member_info().to_group_and_user(g, u)`.
- Forwarded markdown: `markdown_build(name, uin)`, then
  `set_markdown(markdown)`, then `await do_forward_id()`.

A chain is sent with one of these:

- `do()`
- `do_msg_id()`, which returns the message id
- `do_response()`, which returns a `Status`
- `do_and_response()`, which returns a `Response`
- `do_with_callback(callback)`

Each of them raises `ApiError` when the reply's status is not `ok`.
Requests are POSTed as JSON to `<url>/<action>`. Empty parameters are left
out of the body; `build_body()` shows the body that would be sent.

Three queries never raise. `get_login_info()`, `get_msg(msg_id)` and
`get_stranger_info(user_id)` log the failure and return an empty
`LoginInfo`, `MsgInfo` or `StrangerInfo`.

`lagrange_sdk.response.Response` wraps a raw reply and decodes it on first
use. It offers `ok()`, `status_msg()`, `result()`, `parse()`, `get_data()`
and `group_message_response()`.

## Markdown: `lagrange_sdk.markdown`

```python
from lagrange_sdk.markdown import MarkDown

md = (
    MarkDown()
    .h1("Daily report")
    .bold("All systems normal")
    .new_line()
    .url("Dashboard", "https://example.com/dashboard")
    .code("status = 'ok'")
)
```

Line breaks are written escaped, as a backslash followed by `n`. Two methods
do not simply append text:

- `mqq_api_at_to_profile` replaces the whole text.
- `divider_line` strips surrounding whitespace from the result.

## Keyboards: `lagrange_sdk.keyboard`

```python
from lagrange_sdk.keyboard import new_keyboard, new_row

keyboard = (
    new_keyboard()
    .row(new_row().text_button("Help", "Help", "/help", False, True))
    .row(new_row().url_button("Docs", "Docs", "https://example.com/docs", False, False))
)
payload = keyboard.to_dict()
```

Each button takes the next value of a process-wide counter as its id. Call
`reset_auto_id()` to start the numbering again from 1. `to_dict()` leaves
empty fields out.

## Other helpers

- `lagrange_sdk.limiter.new_limiter(rate, burst, key)` returns a
  token-bucket `Limiter` that is shared per key. `Limiter.allow()` takes one
  token if one is left. A background thread removes limiters that have not
  been used for more than a minute. `Limiters` can also be used as a
  registry of your own.
- `lagrange_sdk.http_client.HTTPClient(base_url, timeout=30.0)` offers
  `get`, `post_json` and `post_form`, plus shared headers set with
  `add_header`. A status of 400 or more raises `HTTPStatusError`.
  `json_request` and `form_request` build bare `httpx.Request` objects.
- `lagrange_sdk.image.compress_to_base64(data, quality)` re-encodes an image
  as JPEG and returns it in base64, keeping its size. Quality is clamped to
  1–100. The same is offered for files (`compress_file_to_base64`) and URLs
  (`compress_url_to_base64`). `load_image` opens a file as a Pillow image.
- `lagrange_sdk.pixiv` talks to a random-illustration API:
  - `fetch_pixiv(url, PixivQuery().set_defaults())`
  - `modify_pixiv_image_url` turns an image URL into its 250x250 thumbnail
    URL.
- `lagrange_sdk.pixiv2.get_pixiv_pid_title_url(client, group_id, keyword, r18)`
  returns the first match of a keyword search. When nothing matches, it sends
  a notice to the group through the bot at `constants.BOT_URL` and raises
  `PixivNotFoundError`.
- `lagrange_sdk.utils` holds `is_admin`, `is_in_group`, `is_in_list` and
  `random_between`.

## What it does not do

- There is no command-line program or ready-made bot. You write the callbacks
  and start `Core.listen_and_wait()` yourself.
- API calls go over HTTP only. The WebSocket is used just to receive events.
- Keyboards are built as dictionaries only. The builder has no step that
  sends them.