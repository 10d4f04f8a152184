"""Example: Building queries with QueryBuilder.

This example demonstrates appending raw SQL, binding escaped values and
building comma-separated lists.
"""

from chquery import QueryBuilder

# Raw fragments and bound values
qb = QueryBuilder("SELECT * FROM events")
qb.push(" WHERE user = ").push_bind("O'Brien").push(" AND score > ").push_bind(9.5)
print(qb.build())
# SELECT * FROM events WHERE user = 'O\'Brien' AND score > 9.5

# IN (...) lists
ids = [3, 5, 8]
qb = QueryBuilder("SELECT * FROM events WHERE id IN ")
with qb.separated(", ") as sep:
    sep.push_unseparated("(")
    for value in ids:
        sep.push_bind(value)
    sep.push_unseparated(")")
print(qb.build())
# SELECT * FROM events WHERE id IN (3, 5, 8)

# Array literals
qb = QueryBuilder("SELECT hasAny(tags, ").push_bind(["a", "b"]).push(") FROM events")
print(qb.build())
# SELECT hasAny(tags, ['a', 'b']) FROM events
