#!/usr/bin/env python
"""
Database setup script for the project management backend
This script will apply migrations and optionally seed sample data
"""

import os
import sys
import subprocess

def run_command(command, description):
    """Run a command and handle errors"""
    print(f"\n🔄 {description}...")
    try:
        result = subprocess.run(command, shell=True, check=True, capture_output=True, text=True)
        print(f"✅ {description} completed successfully")
        if result.stdout:
            print(result.stdout)
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed:")
        print(f"Error: {e.stderr}")
        return False

def main():
    print("🚀 Project Management Database Setup")
    print("=" * 50)

    if not os.path.exists('manage.py'):
        print("❌ Error: manage.py not found. Please run this script from the Django project root.")
        sys.exit(1)

    # Migrations are checked in; only apply them
    if not run_command(f"{sys.executable} manage.py migrate", "Applying migrations"):
        print("❌ Migration failed. Cannot continue.")
        sys.exit(1)

    seed = input("\n Would you like to seed sample data? (y/n): ").lower().strip()

    if seed in ['y', 'yes']:
        print("\n This will create:")
        print("- 4 teams with a product owner and project manager each")
        print("- 8 users spread across the teams")
        print("- 5 projects, the older ones finished")
        print("- 20 tasks with random status, priority, tags and assignees")
        print("")
        proceed = input("Proceed? Existing project data will be cleared (y/n): ").lower().strip()

        if proceed in ['y', 'yes']:
            if not run_command(f"{sys.executable} manage.py seed_data --clear", "Seeding sample data"):
                print(" Seeding failed.")
                sys.exit(1)

    print("\n Database setup completed successfully!")
    print("\nYou can now:")
    print("1. Start the development server: python manage.py runserver")
    print("2. Register an account: POST http://127.0.0.1:8000/auth/register")
    print("3. Access the admin panel: http://127.0.0.1:8000/admin/")

if __name__ == "__main__":
    main()
