def seed(conn):
    # the settings row is a singleton; create it empty so reads never miss
    conn.execute("INSERT OR IGNORE INTO settings(id) VALUES (1)")
    conn.commit()
