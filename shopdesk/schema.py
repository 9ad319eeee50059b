SCHEMA_SQL = r"""
-- Item catalog
CREATE TABLE IF NOT EXISTS items (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL UNIQUE,
  sale_type TEXT NOT NULL DEFAULT 'Per KG',   -- Per KG / Per PCS
  weight_per_pcs REAL,                        -- kg per piece, for Per PCS items
  price_per_kg REAL,
  price_per_pcs REAL,
  created_at TEXT NOT NULL
);

-- Orders (items is the serialized line payload, see services/order_items.py)
CREATE TABLE IF NOT EXISTS orders (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  order_number TEXT NOT NULL UNIQUE,
  customer_name TEXT NOT NULL,
  order_date TEXT NOT NULL,              -- business-local ISO date, not a timestamp
  items TEXT NOT NULL,
  total_amount REAL NOT NULL DEFAULT 0,
  created_at TEXT NOT NULL
);

-- Opening stock counts (start of business date)
CREATE TABLE IF NOT EXISTS opening_stock (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  date TEXT NOT NULL,
  item_id INTEGER NOT NULL,
  item_name TEXT NOT NULL,               -- denormalized for display
  quantity REAL NOT NULL,
  unit TEXT NOT NULL,                    -- PCS / KG
  created_at TEXT NOT NULL
);

-- Closing stock counts (end of business date)
CREATE TABLE IF NOT EXISTS closing_stock (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  date TEXT NOT NULL,
  item_id INTEGER NOT NULL,
  item_name TEXT NOT NULL,
  quantity REAL NOT NULL,
  unit TEXT NOT NULL,
  created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_orders_date ON orders(order_date);
CREATE INDEX IF NOT EXISTS idx_opening_stock_date ON opening_stock(date);
CREATE INDEX IF NOT EXISTS idx_closing_stock_date ON closing_stock(date);
"""
