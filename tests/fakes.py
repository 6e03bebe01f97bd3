"""
In-memory stand-in for the Supabase query builder used by the tests
"""

from types import SimpleNamespace


class FakeQuery:

    def __init__(self, client, table):
        self.client = client
        self.table_name = table
        self.operation = 'select'
        self.payload = None
        self.filters = []

    def select(self, columns='*'):
        self.operation = 'select'
        self.payload = columns
        return self

    def insert(self, row):
        self.operation = 'insert'
        self.payload = row
        return self

    def update(self, values):
        self.operation = 'update'
        self.payload = values
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def execute(self):
        self.client.calls.append((self.table_name, self.operation, self.payload, list(self.filters)))

        if self.table_name in self.client.failing_tables:
            raise RuntimeError(f"{self.table_name} unavailable")

        if self.operation == 'select':
            rows = self.client.rows.get(self.table_name, [])
            for column, value in self.filters:
                rows = [row for row in rows if row.get(column) == value]
            return SimpleNamespace(data=rows)
        if self.operation == 'insert':
            return SimpleNamespace(data=[{'id': f"{self.table_name}-1", **self.payload}])
        return SimpleNamespace(data=[self.payload])


class FakeSupabase:

    def __init__(self, rows=None, failing_tables=()):
        self.rows = rows or {}
        self.failing_tables = set(failing_tables)
        self.calls = []

    def table(self, name):
        return FakeQuery(self, name)

    def calls_for(self, table, operation):
        return [call for call in self.calls if call[0] == table and call[1] == operation]
