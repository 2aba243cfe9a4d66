"""
Library of pre-defined tool patterns that can be matched to user requirements.

Each template is the body of the generated ``_execute(args, context)`` coroutine.
Templates may reference ``$tool_name``, ``$function_name`` and ``$description``;
a literal dollar sign is written ``$$``.
"""

from typing import List, Optional, Tuple

from mcpgen.models.catalog import ToolCategory, ToolPattern


_API_REQUEST_TEMPLATE = '''\
import httpx

method = (args.method or "GET").upper()
logger.info("$tool_name: %s %s", method, args.url)
async with httpx.AsyncClient(timeout=30.0) as client:
    response = await client.request(
        method,
        args.url,
        headers=args.headers or {},
        json=args.data,
    )
try:
    data = response.json()
except ValueError:
    data = response.text
return {
    "status": response.status_code,
    "data": data,
    "headers": dict(response.headers),
}
'''

_WEBHOOK_SENDER_TEMPLATE = '''\
import hashlib
import hmac
import json

import httpx

body = json.dumps({"event": args.event, "payload": args.payload or {}}, sort_keys=True)
headers = {"Content-Type": "application/json"}
if args.secret:
    digest = hmac.new(args.secret.encode(), body.encode(), hashlib.sha256).hexdigest()
    headers["X-Signature-256"] = f"sha256={digest}"
logger.info("$tool_name: delivering %s to %s", args.event, args.url)
async with httpx.AsyncClient(timeout=30.0) as client:
    response = await client.post(args.url, content=body, headers=headers)
return {"status": response.status_code, "delivered": response.is_success}
'''

_FILE_OPERATIONS_TEMPLATE = '''\
import shutil
from pathlib import Path

import aiofiles

path = Path(args.path)
if args.action == "read":
    async with aiofiles.open(path, "r", encoding="utf-8") as handle:
        return {"content": await handle.read()}
if args.action == "write":
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as handle:
        await handle.write(args.content or "")
    return {"written": str(path)}
if args.action == "delete":
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()
    return {"deleted": str(path)}
if args.action == "list":
    return {"files": sorted(entry.name for entry in path.iterdir())}
if args.action in ("copy", "move"):
    if not args.destination:
        raise ValueError(f"destination is required for {args.action}")
    operation = shutil.copy2 if args.action == "copy" else shutil.move
    operation(str(path), args.destination)
    return {"destination": args.destination}
if args.action == "exists":
    return {"exists": path.exists()}
raise ValueError(f"Unknown action: {args.action}")
'''

_DATABASE_QUERY_TEMPLATE = '''\
import os

dsn = args.database or os.environ.get("DATABASE_URL", "")
if not dsn:
    raise ValueError("No database given and DATABASE_URL is not set")
params = list(args.params or [])
if dsn.startswith("sqlite"):
    import aiosqlite

    async with aiosqlite.connect(dsn.split("///", 1)[-1]) as connection:
        connection.row_factory = aiosqlite.Row
        cursor = await connection.execute(args.query, params)
        rows = [dict(row) for row in await cursor.fetchall()]
        await connection.commit()
        return {"rows": rows, "row_count": len(rows)}

import asyncpg

connection = await asyncpg.connect(dsn)
try:
    records = await connection.fetch(args.query, *params)
finally:
    await connection.close()
rows = [dict(record) for record in records]
return {"rows": rows, "row_count": len(rows)}
'''

_NOTIFICATION_SENDER_TEMPLATE = '''\
import asyncio
import os

logger.info("$tool_name: sending %s notification to %s", args.type, args.recipient)
if args.type == "webhook":
    import httpx

    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.post(args.recipient, json={"text": args.message})
    return {"status": response.status_code}
if args.type == "slack":
    from slack_sdk.web.async_client import AsyncWebClient

    client = AsyncWebClient(token=os.environ["SLACK_BOT_TOKEN"])
    response = await client.chat_postMessage(channel=args.channel or args.recipient, text=args.message)
    return {"ts": response["ts"]}
if args.type == "email":
    from sendgrid import SendGridAPIClient
    from sendgrid.helpers.mail import Mail

    mail = Mail(
        from_email=os.environ.get("SENDGRID_FROMEMAIL", "noreply@example.com"),
        to_emails=args.recipient,
        subject=args.subject or "Notification",
        plain_text_content=args.message,
    )
    client = SendGridAPIClient(os.environ["SENDGRID_API_KEY"])
    response = await asyncio.to_thread(client.send, mail)
    return {"status": response.status_code}
if args.type == "sms":
    from twilio.rest import Client

    client = Client(os.environ["TWILIO_ACCOUNT_SID"], os.environ["TWILIO_AUTH_TOKEN"])
    message = await asyncio.to_thread(
        client.messages.create,
        to=args.recipient,
        from_=os.environ["TWILIO_PHONE_NUMBER"],
        body=args.message,
    )
    return {"sid": message.sid}
raise ValueError(f"Unknown notification type: {args.type}")
'''

_DATA_PROCESSING_TEMPLATE = '''\
data = list(args.data)
config = args.config or {}
if args.operation == "filter":
    field, value = config.get("field"), config.get("value")
    return {"result": [item for item in data if isinstance(item, dict) and item.get(field) == value]}
if args.operation == "map":
    fields = config.get("fields") or []
    return {"result": [{key: item.get(key) for key in fields} for item in data if isinstance(item, dict)]}
if args.operation == "sort":
    key = config.get("key")
    reverse = bool(config.get("reverse", False))
    if key:
        return {"result": sorted(data, key=lambda item: item.get(key), reverse=reverse)}
    return {"result": sorted(data, reverse=reverse)}
if args.operation == "group":
    key = config.get("key")
    groups = {}
    for item in data:
        groups.setdefault(str(item.get(key)), []).append(item)
    return {"result": groups}
if args.operation == "transform":
    rename = config.get("rename") or {}
    return {"result": [{rename.get(k, k): v for k, v in item.items()} for item in data if isinstance(item, dict)]}
raise ValueError(f"Unknown operation: {args.operation}")
'''

_CSV_PROCESSING_TEMPLATE = '''\
import io

import pandas as pd

if args.content:
    frame = pd.read_csv(io.StringIO(args.content))
elif args.path:
    frame = pd.read_csv(args.path)
else:
    raise ValueError("Either path or content is required")
if args.operation == "summary":
    return {"columns": list(frame.columns), "rows": len(frame), "describe": frame.describe().to_dict()}
if args.operation == "head":
    return {"records": frame.head(args.limit or 10).to_dict(orient="records")}
if args.operation == "aggregate":
    if not args.group_by:
        raise ValueError("group_by is required for aggregate")
    return {"records": frame.groupby(args.group_by).size().reset_index(name="count").to_dict(orient="records")}
raise ValueError(f"Unknown operation: {args.operation}")
'''

_AUTH_HANDLER_TEMPLATE = '''\
import os
import time

import bcrypt
import jwt

secret = os.environ.get("JWT_SECRET", "")
if args.action == "hash":
    hashed = bcrypt.hashpw((args.password or "").encode(), bcrypt.gensalt())
    return {"hash": hashed.decode()}
if args.action == "check":
    matches = bcrypt.checkpw((args.password or "").encode(), (args.hash or "").encode())
    return {"valid": matches}
if not secret:
    raise RuntimeError("JWT_SECRET environment variable is required")
if args.action == "issue":
    claims = dict(args.claims or {})
    claims["exp"] = int(time.time()) + (args.expires_in or 3600)
    return {"token": jwt.encode(claims, secret, algorithm="HS256")}
if args.action == "verify":
    try:
        return {"valid": True, "claims": jwt.decode(args.token or "", secret, algorithms=["HS256"])}
    except jwt.PyJWTError as exc:
        return {"valid": False, "reason": str(exc)}
raise ValueError(f"Unknown auth action: {args.action}")
'''

_CACHE_STORE_TEMPLATE = '''\
import json
import os

import redis.asyncio as redis

client = redis.from_url(os.environ.get("REDIS_URL", "redis://localhost:6379/0"))
try:
    if args.action == "get":
        raw = await client.get(args.key)
        return {"key": args.key, "value": json.loads(raw) if raw is not None else None}
    if args.action == "set":
        await client.set(args.key, json.dumps(args.value), ex=args.ttl)
        return {"key": args.key, "stored": True}
    if args.action == "delete":
        return {"key": args.key, "deleted": bool(await client.delete(args.key))}
    raise ValueError(f"Unknown cache action: {args.action}")
finally:
    await client.aclose()
'''


TOOL_PATTERNS: Tuple[ToolPattern, ...] = (
    ToolPattern(
        id="api-request",
        name="API Request Tool",
        category=ToolCategory.API,
        description="Make HTTP requests to REST APIs",
        actions=("get", "post", "put", "delete", "patch", "request", "fetch"),
        examples=("fetch data from API", "post to webhook", "REST API calls"),
        dependencies=("httpx",),
        template=_API_REQUEST_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "API endpoint URL"},
                "method": {
                    "type": "string",
                    "enum": ["GET", "POST", "PUT", "DELETE", "PATCH"],
                    "description": "HTTP method",
                },
                "headers": {"type": "object", "description": "HTTP headers"},
                "data": {"type": "object", "description": "Request body data"},
            },
            "required": ["url"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "status": {"type": "integer"},
                "data": {"type": "object"},
                "headers": {"type": "object"},
            },
        },
    ),
    ToolPattern(
        id="webhook-sender",
        name="Webhook Sender Tool",
        category=ToolCategory.API,
        description="Deliver signed event payloads to webhook endpoints",
        actions=("webhook", "trigger", "callback", "dispatch"),
        examples=("trigger a webhook", "notify an endpoint of events", "signed callbacks"),
        dependencies=("httpx",),
        template=_WEBHOOK_SENDER_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "Webhook endpoint URL"},
                "event": {"type": "string", "description": "Event name"},
                "payload": {"type": "object", "description": "Event payload"},
                "secret": {"type": "string", "description": "Shared secret used to sign the body"},
            },
            "required": ["url", "event"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "status": {"type": "integer"},
                "delivered": {"type": "boolean"},
            },
        },
    ),
    ToolPattern(
        id="file-operations",
        name="File Operations Tool",
        category=ToolCategory.FILE,
        description="Read, write, and manipulate files",
        actions=("read", "write", "delete", "list", "copy", "move", "exists"),
        examples=("read files", "write data to file", "manage directories", "file system operations"),
        dependencies=("aiofiles",),
        template=_FILE_OPERATIONS_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": ["read", "write", "delete", "list", "copy", "move", "exists"],
                    "description": "File operation to perform",
                },
                "path": {"type": "string", "description": "File or directory path"},
                "content": {"type": "string", "description": "Content to write (for write action)"},
                "destination": {"type": "string", "description": "Destination path (for copy/move)"},
            },
            "required": ["action", "path"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "content": {"type": "string"},
                "files": {"type": "array"},
                "exists": {"type": "boolean"},
            },
        },
    ),
    ToolPattern(
        id="database-query",
        name="Database Query Tool",
        category=ToolCategory.DATABASE,
        description="Execute database queries and operations",
        actions=("query", "insert", "update", "delete", "select"),
        examples=("run SQL queries", "database operations", "data retrieval"),
        dependencies=("asyncpg", "aiosqlite"),
        template=_DATABASE_QUERY_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "SQL query to execute"},
                "params": {"type": "array", "description": "Query parameters"},
                "database": {"type": "string", "description": "Connection URL, defaults to DATABASE_URL"},
            },
            "required": ["query"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "rows": {"type": "array"},
                "row_count": {"type": "integer"},
            },
        },
    ),
    ToolPattern(
        id="notification-sender",
        name="Notification Sender Tool",
        category=ToolCategory.NOTIFICATION,
        description="Send notifications via email, Slack, SMS or webhooks",
        actions=("send", "email", "slack", "webhook", "sms", "notify", "alert"),
        examples=("send emails", "slack notifications", "SMS alerts", "webhook calls"),
        dependencies=("httpx", "slack-sdk", "sendgrid", "twilio"),
        template=_NOTIFICATION_SENDER_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "enum": ["email", "slack", "webhook", "sms"],
                    "description": "Notification channel",
                },
                "recipient": {"type": "string", "description": "Recipient (email, channel, phone, URL)"},
                "message": {"type": "string", "description": "Message content"},
                "subject": {"type": "string", "description": "Subject (for email)"},
                "channel": {"type": "string", "description": "Slack channel"},
            },
            "required": ["type", "recipient", "message"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "status": {"type": "integer"},
                "ts": {"type": "string"},
                "sid": {"type": "string"},
            },
        },
    ),
    ToolPattern(
        id="data-processing",
        name="Data Processing Tool",
        category=ToolCategory.PROCESSING,
        description="Transform, filter, and process data",
        actions=("transform", "filter", "map", "reduce", "sort", "group"),
        examples=("process arrays", "transform data", "filter results", "data manipulation"),
        dependencies=(),
        template=_DATA_PROCESSING_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "data": {"type": "array", "description": "Input data array"},
                "operation": {
                    "type": "string",
                    "enum": ["filter", "map", "sort", "group", "transform"],
                    "description": "Operation to apply",
                },
                "config": {"type": "object", "description": "Operation configuration"},
            },
            "required": ["data", "operation"],
        },
        output_schema={
            "type": "object",
            "properties": {"result": {"type": "array"}},
        },
    ),
    ToolPattern(
        id="csv-processing",
        name="CSV Processing Tool",
        category=ToolCategory.PROCESSING,
        description="Parse, summarize and aggregate tabular CSV data",
        actions=("parse", "csv", "aggregate", "summarize", "import", "export"),
        examples=("analyze spreadsheets", "summarize CSV files", "tabular reports"),
        dependencies=("pandas",),
        template=_CSV_PROCESSING_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "operation": {
                    "type": "string",
                    "enum": ["summary", "head", "aggregate"],
                    "description": "Operation to apply",
                },
                "path": {"type": "string", "description": "CSV file path"},
                "content": {"type": "string", "description": "Inline CSV content"},
                "group_by": {"type": "string", "description": "Column to aggregate on"},
                "limit": {"type": "integer", "description": "Row limit for head"},
            },
            "required": ["operation"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "columns": {"type": "array"},
                "records": {"type": "array"},
            },
        },
    ),
    ToolPattern(
        id="auth-handler",
        name="Authentication Handler",
        category=ToolCategory.AUTH,
        description="Issue and verify tokens and hash credentials",
        actions=("login", "logout", "verify", "refresh", "oauth", "hash", "token"),
        examples=("user authentication", "JWT tokens", "OAuth flows", "login systems"),
        dependencies=("pyjwt", "bcrypt"),
        template=_AUTH_HANDLER_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": ["issue", "verify", "hash", "check"],
                    "description": "Authentication action",
                },
                "token": {"type": "string", "description": "JWT to verify"},
                "claims": {"type": "object", "description": "Claims to embed in an issued token"},
                "expires_in": {"type": "integer", "description": "Token lifetime in seconds"},
                "password": {"type": "string", "description": "Password to hash or check"},
                "hash": {"type": "string", "description": "Stored bcrypt hash to check against"},
            },
            "required": ["action"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "token": {"type": "string"},
                "valid": {"type": "boolean"},
                "claims": {"type": "object"},
                "hash": {"type": "string"},
            },
        },
    ),
    ToolPattern(
        id="cache-store",
        name="Cache Store Tool",
        category=ToolCategory.DATABASE,
        description="Store and retrieve values in a Redis cache",
        actions=("cache", "store", "expire", "remember"),
        examples=("cache results", "key value storage", "session storage"),
        dependencies=("redis",),
        template=_CACHE_STORE_TEMPLATE,
        input_schema={
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": ["get", "set", "delete"],
                    "description": "Cache action",
                },
                "key": {"type": "string", "description": "Cache key"},
                "value": {"description": "JSON-serializable value (for set)"},
                "ttl": {"type": "integer", "description": "Expiry in seconds (for set)"},
            },
            "required": ["action", "key"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "key": {"type": "string"},
                "value": {},
                "stored": {"type": "boolean"},
                "deleted": {"type": "boolean"},
            },
        },
    ),
)


def all_patterns() -> Tuple[ToolPattern, ...]:
    """Get all tool patterns in catalog order."""
    return TOOL_PATTERNS


def get_pattern(pattern_id: str) -> Optional[ToolPattern]:
    """Get a tool pattern by ID."""
    for pattern in TOOL_PATTERNS:
        if pattern.id == pattern_id:
            return pattern
    return None


def get_tool_categories() -> List[ToolCategory]:
    """Get all categories that have at least one pattern, in catalog order."""
    categories: List[ToolCategory] = []
    for pattern in TOOL_PATTERNS:
        if pattern.category not in categories:
            categories.append(pattern.category)
    return categories


def get_patterns_by_category(category: ToolCategory) -> List[ToolPattern]:
    """Get patterns of one category, in catalog order."""
    return [pattern for pattern in TOOL_PATTERNS if pattern.category == category]
