"""Column descriptor sets, one per resource kind.

Order is display order.
"""

from __future__ import annotations

from intercom_cli.core.models import Column, ColumnType

USERS: tuple[Column, ...] = (
    Column("id", "ID", 15),
    Column("email", "Email", 30),
    Column("name", "Name", 25),
    Column("created_at", "Created", 20, ColumnType.DATE),
    Column("last_seen_at", "Last Seen", 20, ColumnType.DATE),
)

CONTACTS: tuple[Column, ...] = (
    Column("id", "ID", 15),
    Column("email", "Email", 30),
    Column("name", "Name", 25),
    Column("phone", "Phone", 20),
    Column("created_at", "Created", 20, ColumnType.DATE),
)

CONVERSATIONS: tuple[Column, ...] = (
    Column("id", "ID", 15),
    Column("created_at", "Created", 20, ColumnType.DATE),
    Column("updated_at", "Updated", 20, ColumnType.DATE),
    Column("state", "State", 15),
    Column("source.type", "Source", 15),
    Column("assignee.name", "Assignee", 20),
)

COMPANIES: tuple[Column, ...] = (
    Column("id", "ID", 15),
    Column("company_id", "Company ID", 20),
    Column("name", "Name", 30),
    Column("created_at", "Created", 20, ColumnType.DATE),
    Column("user_count", "Users", 10),
)

ARTICLES: tuple[Column, ...] = (
    Column("id", "ID", 15),
    Column("title", "Title", 40),
    Column("state", "State", 15),
    Column("author.name", "Author", 20),
    Column("updated_at", "Updated", 20, ColumnType.DATE),
)

COLLECTIONS: tuple[Column, ...] = (
    Column("id", "ID", 15),
    Column("name", "Name", 30),
    Column("description", "Description", 40),
    Column("created_at", "Created", 20, ColumnType.DATE),
)
