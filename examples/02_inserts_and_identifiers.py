"""Example: INSERT statements with quoted identifiers.

Column names come from data, so they are quoted with push_identifier.
"""

import datetime as dt

from chquery import QueryBuilder, query

rows = [
    {"id": 1, "name": "alpha", "created at": dt.datetime(2024, 1, 2, 3, 4, 5)},
    {"id": 2, "name": "b\\eta", "created at": dt.datetime(2024, 1, 3, 0, 0, 0)},
]
columns = list(rows[0])

qb = QueryBuilder("INSERT INTO ").push_identifier("events").push(" ")
with qb.separated(", ") as cols:
    cols.push_unseparated("(")
    for name in columns:
        cols.push_identifier(name)
    cols.push_unseparated(") VALUES ")

for i, row in enumerate(rows):
    qb.push(", (" if i else "(")
    with qb.separated(", ") as values:
        for name in columns:
            values.push_bind(row[name])
    qb.push(")")

print(qb.build())
# INSERT INTO `events` (`id`, `name`, `created at`) VALUES
#   (1, 'alpha', '2024-01-02 03:04:05'), (2, 'b\\eta', '2024-01-03 00:00:00')

# Dialect from a database URL (nothing is connected)
qb = query("SELECT ", url="clickhouse+native://localhost:9000/default")
print(qb.push_identifier("total").push(" FROM ").push_identifier("daily stats").build())
# SELECT `total` FROM `daily stats`
