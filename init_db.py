#!/usr/bin/env python3
"""
Database initialization script for the Faculty Marks Portal
Run this script to create the tables, or pass --reset to drop and recreate them
"""

from app import create_app
from database import init_db, reset_database
import sys

def main():
    """Main function to initialize database"""
    app = create_app()

    if len(sys.argv) > 1 and sys.argv[1] == '--reset':
        print("WARNING: This will delete all existing marks, sections and faculty accounts!")
        confirm = input("Are you sure you want to reset the database? (yes/no): ")
        if confirm.lower() == 'yes':
            reset_database(app)
            print("✓ Database reset")
        else:
            print("Database reset cancelled.")
    else:
        init_db(app)
        print(f"✓ Tables ready at {app.config['SQLALCHEMY_DATABASE_URI']}")

if __name__ == '__main__':
    main()
