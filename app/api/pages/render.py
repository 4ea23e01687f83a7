"""HTML for the control panel page.

Pages are assembled from small string helpers; every dynamic value goes
through `esc()`.
"""

from html import escape
from typing import Any

from app.domain.live.dashboard.dashboard_domain import DashboardView
from app.schemas.event import ChannelClass, EventRecord, InputType

_STYLE = """
    body { font-family: system-ui, sans-serif; margin: 0 auto; max-width: 1200px; padding: 1rem 2rem; }
    table { border-collapse: collapse; width: 100%; margin-bottom: 1.5rem; }
    th, td { border-bottom: 1px solid #ddd; padding: .4rem .6rem; text-align: left; font-size: .9rem; }
    form.inline { display: inline; }
    fieldset { margin-bottom: 1rem; }
    label { display: block; margin: .3rem 0; }
    .alert { padding: .6rem 1rem; border-radius: 4px; margin-bottom: 1rem; }
    .alert-success { background: #e6f4ea; color: #1e4620; }
    .alert-danger { background: #fdecea; color: #611a15; }
"""


def esc(value: Any) -> str:
    return escape("" if value is None else str(value), quote=True)


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{esc(title)} - Live Event Panel</title>
    <meta charset="utf-8"/>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>{_STYLE}</style>
</head>
<body>
{body}
</body>
</html>
"""


def _alert(message: str | None, status: str | None) -> str:
    if not message:
        return ""
    kind = "success" if status == "success" else "danger"
    return f'<div class="alert alert-{kind}">{esc(message)}</div>'


def _options(items: list[tuple[str, str]], selected: str | None = None, blank: str | None = None) -> str:
    out = [f'<option value="">{esc(blank)}</option>'] if blank is not None else []
    for value, label in items:
        sel = " selected" if value == selected else ""
        out.append(f'<option value="{esc(value)}"{sel}>{esc(label)}</option>')
    return "".join(out)


def _hidden_region(region: str) -> str:
    return f'<input type="hidden" name="region" value="{esc(region)}">'


def _action(path: str, region: str, field: str, value: str, label: str) -> str:
    return (
        f'<form class="inline" method="post" action="{esc(path)}">'
        f"{_hidden_region(region)}"
        f'<input type="hidden" name="{esc(field)}" value="{esc(value)}">'
        f'<button type="submit">{esc(label)}</button></form>'
    )


def _region_picker(view: DashboardView) -> str:
    regions = [(r, r) for r in view.available_regions] or [(view.region, view.region)]
    return (
        '<form method="get" action="/">'
        f'<label>Region <select name="region" onchange="this.form.submit()">{_options(regions, view.region)}</select></label>'
        "</form>"
    )


def _channels_table(view: DashboardView) -> str:
    rows = []
    for ch in view.channels:
        channel_id = ch.get("Id", "")
        actions = " ".join(
            [
                _action("/channels/start", view.region, "channelId", channel_id, "Start"),
                _action("/channels/stop", view.region, "channelId", channel_id, "Stop"),
                _action("/channels/delete", view.region, "channelId", channel_id, "Delete"),
            ]
        )
        rows.append(
            f"<tr><td>{esc(ch.get('Name'))}</td><td>{esc(channel_id)}</td>"
            f"<td>{esc(ch.get('State'))}</td><td>{esc(ch.get('ChannelClass'))}</td><td>{actions}</td></tr>"
        )
    body = "".join(rows) or '<tr><td colspan="5">No channels</td></tr>'
    return (
        "<h2>Channels</h2><table><tr><th>Name</th><th>Id</th><th>State</th><th>Class</th><th></th></tr>"
        f"{body}</table>"
    )


def _inputs_table(view: DashboardView) -> str:
    rows = []
    for item in view.inputs:
        input_id = item.get("Id", "")
        attached = ", ".join(item.get("AttachedChannels") or [])
        rows.append(
            f"<tr><td>{esc(item.get('Name'))}</td><td>{esc(input_id)}</td><td>{esc(item.get('Type'))}</td>"
            f"<td>{esc(item.get('State'))}</td><td>{esc(attached)}</td>"
            f"<td>{_action('/inputs/delete', view.region, 'inputId', input_id, 'Delete')}</td></tr>"
        )
    body = "".join(rows) or '<tr><td colspan="6">No inputs</td></tr>'
    return (
        "<h2>Inputs</h2><table><tr><th>Name</th><th>Id</th><th>Type</th><th>State</th><th>Channels</th><th></th></tr>"
        f"{body}</table>"
    )


def _events_table(events: list[EventRecord]) -> str:
    rows = [
        f"<tr><td>{esc(e.event_name)}</td><td>{esc(e.channel_id)}</td><td>{esc(e.input_type.value)}</td>"
        f"<td>{esc(e.lifetime.start.isoformat())}</td>"
        f"<td>{esc(e.booking.start.isoformat())} → {esc(e.booking.end.isoformat())}</td></tr>"
        for e in events
    ]
    body = "".join(rows) or '<tr><td colspan="5">No events</td></tr>'
    return (
        "<h2>Events</h2><table><tr><th>Name</th><th>Channel</th><th>Input type</th><th>Start</th><th>Booking</th></tr>"
        f"{body}</table>"
    )


def _class_select(name: str) -> str:
    return f'<select name="{name}">{_options([(c.value, c.value) for c in ChannelClass])}</select>'


def _forms(view: DashboardView) -> str:
    groups = [(g.get("Id", ""), g.get("Id", "")) for g in view.input_security_groups]
    devices = [(d.get("Id", ""), d.get("Name") or d.get("Id", "")) for d in view.link_devices]
    flows = [(f.get("FlowArn", ""), f.get("Name") or f.get("FlowArn", "")) for f in view.mediaconnect_flows]
    outputs = [(c.get("Id", ""), c.get("Id", "")) for c in view.mediapackage_channels]
    inputs = [(i.get("Id", ""), i.get("Name") or i.get("Id", "")) for i in view.inputs]
    region = _hidden_region(view.region)

    return f"""
<h2>Create</h2>
<fieldset><legend>Event</legend>
<form id="create-event">
  {region}
  <label>Event name <input name="eventName" required></label>
  <label>Start <input type="datetime-local" name="lifetimeStart" required></label>
  <label>Channel class {_class_select("channelClass")}</label>
  <label>Input type <select name="inputType">{_options([(t.value, t.value) for t in InputType])}</select></label>
  <label>Output (MediaPackage) <select name="outputId">{_options(outputs)}</select></label>
  <label>Source (S3 key) <input name="sourceId"></label>
  <label>Source pipeline 0 (device id / flow ARN) <input name="sourceId1"></label>
  <label>Source pipeline 1 (device id / flow ARN) <input name="sourceId2"></label>
  <button type="submit">Create event</button>
</form>
</fieldset>
<script>
document.getElementById("create-event").addEventListener("submit", async (ev) => {{
  ev.preventDefault();
  const body = Object.fromEntries(new FormData(ev.target));
  const res = await fetch("/api/events/create", {{
    method: "POST", headers: {{"Content-Type": "application/json"}}, body: JSON.stringify(body)
  }});
  const data = await res.json();
  const params = new URLSearchParams({{region: body.region}});
  params.set("message", data.success ? `Event '${{body.eventName}}' created.` : data.errmesg);
  params.set("messageStatus", data.success ? "success" : "danger");
  window.location = "/?" + params.toString();
}});
</script>
<fieldset><legend>RTMP input</legend>
<form method="post" action="/inputs/create-rtmp">{region}
  <label>Name <input name="inputName" required></label>
  <label>Class {_class_select("inputClass")}</label>
  <label>Security group <select name="securityGroupId">{_options(groups)}</select></label>
  <button type="submit">Create</button>
</form></fieldset>
<fieldset><legend>MP4 input</legend>
<form method="post" action="/inputs/create-mp4">{region}
  <label>Name <input name="inputName" required></label>
  <label>Class {_class_select("inputClass")}</label>
  <label>S3 key <input name="s3FilePath" required></label>
  <button type="submit">Create</button>
</form></fieldset>
<fieldset><legend>Link input</legend>
<form method="post" action="/inputs/create-link">{region}
  <label>Name <input name="inputName" required></label>
  <label>Device 1 <select name="linkDeviceId1">{_options(devices)}</select></label>
  <label>Device 2 <select name="linkDeviceId2">{_options(devices, blank="(none)")}</select></label>
  <button type="submit">Create</button>
</form></fieldset>
<fieldset><legend>MediaConnect input</legend>
<form method="post" action="/inputs/create-mediaconnect">{region}
  <label>Name <input name="inputName" required></label>
  <label>Flow 1 <select name="flowArn1">{_options(flows)}</select></label>
  <label>Flow 2 <select name="flowArn2">{_options(flows, blank="(none)")}</select></label>
  <button type="submit">Create</button>
</form></fieldset>
<fieldset><legend>Channel</legend>
<form method="post" action="/channels/create">{region}
  <label>Name <input name="channelName" required></label>
  <label>Class {_class_select("channelClass")}</label>
  <label>Input <select name="inputId">{_options(inputs)}</select></label>
  <label>MediaPackage channel <select name="mediaPackageChannelId">{_options(outputs)}</select></label>
  <button type="submit">Create</button>
</form></fieldset>
"""


def render_dashboard(
    view: DashboardView,
    events: list[EventRecord],
    message: str | None = None,
    message_status: str | None = None,
) -> str:
    error = f'<div class="alert alert-danger">{esc(view.error)}</div>' if view.error else ""
    body = (
        f"<h1>Dashboard <small>{esc(view.region)}</small></h1>"
        f"{_region_picker(view)}{_alert(message, message_status)}{error}"
        f"{_events_table(events)}{_channels_table(view)}{_inputs_table(view)}{_forms(view)}"
    )
    return _page("Dashboard", body)


def render_config_error(error: str, message: str | None = None, message_status: str | None = None) -> str:
    body = (
        "<h1>Configuration Error</h1>"
        f"{_alert(message, message_status)}"
        f'<div class="alert alert-danger">{esc(error)}</div>'
        '<form method="get" action="/"><label>Region <input name="region" placeholder="eu-west-1"></label>'
        '<button type="submit">Open</button></form>'
    )
    return _page("Configuration Error", body)
