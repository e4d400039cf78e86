#!/usr/bin/env python3
"""
Startup script for SchemeFlow
"""
import os
import subprocess
import sys
from pathlib import Path

def create_env_file():
    """Create .env file if it doesn't exist"""
    env_path = Path(".env")
    if not env_path.exists():
        print("📝 Creating .env file...")

        env_content = """# Application Configuration
APP_NAME=SchemeFlow
APP_VERSION=1.0.0
DEBUG=true
LOG_LEVEL=INFO

# API Configuration
API_PREFIX=/api
HOST=0.0.0.0
PORT=5000
CORS_ORIGINS=http://localhost:3000,http://localhost:8080

# Storage Configuration (local | mongo)
STORAGE_BACKEND=local
LOCAL_STORE_DIR=.data
MONGODB_URL=mongodb://localhost:27017
MONGODB_DB_NAME=schemeflow_db

# Workflow Configuration
DEFAULT_FACILITY_NAME=Primary Health Center
SEED_DEFAULT_SCHEMES=true

# Session Configuration
SESSION_TTL_MINUTES=480
MAX_SESSIONS=1000
"""

        with open(env_path, 'w') as f:
            f.write(env_content)

        print("✅ .env file created successfully!")
    else:
        print("✅ .env file already exists")

def check_dependencies():
    """Check if required dependencies are installed"""
    print("🔍 Checking dependencies...")

    try:
        import fastapi
        import uvicorn
        import pydantic_settings
        import httpx
        if os.getenv("STORAGE_BACKEND", "local").lower() == "mongo":
            import motor
        print("✅ All Python dependencies are installed")
        return True
    except ImportError as e:
        print(f"❌ Missing dependency: {e}")
        print("📦 Please install dependencies using: pip install -e .")
        return False

def run_tests():
    """Run the test suite"""
    print("🧪 Running tests...")

    try:
        result = subprocess.run([sys.executable, '-m', 'pytest', '-q'], capture_output=True, text=True)
        if result.returncode == 0:
            print("✅ Tests passed successfully")
            return True
        else:
            print(f"❌ Tests failed:\n{result.stdout[-2000:]}")
            return False
    except Exception as e:
        print(f"❌ Failed to run tests: {e}")
        return False

def start_application():
    """Start the FastAPI application"""
    print("🚀 Starting the application...")

    try:
        subprocess.run([
            sys.executable, '-m', 'uvicorn',
            'schemeflow.main:app',
            '--host', os.getenv("HOST", "0.0.0.0"),
            '--port', os.getenv("PORT", "5000"),
            '--reload'
        ])
    except KeyboardInterrupt:
        print("\n👋 Application stopped by user")
    except Exception as e:
        print(f"❌ Failed to start application: {e}")

def main():
    """Main startup function"""
    print("🏥 SchemeFlow - Healthcare Scheme Approvals")
    print("=" * 50)

    create_env_file()

    # Check dependencies
    if not check_dependencies():
        print("\n📦 Please install dependencies first:")
        print("   pip install -e .")
        sys.exit(1)

    # Run tests
    if not run_tests():
        print("\n⚠️  Some tests failed. The application may not work correctly.")

    print("\n🎯 System is ready!")
    print("\n📚 Next steps:")
    print("1. Visit http://localhost:5000/docs for API documentation")
    print("2. Log in with one of the seeded users, e.g. facility@schemeflow.in")
    print("3. Register patients and work the approval queues")

    # Ask if user wants to start the application
    response = input("\n🚀 Start the application now? (y/n): ").lower().strip()
    if response in ['y', 'yes']:
        start_application()
    else:
        print("\n💡 To start the application later, run:")
        print("   uvicorn schemeflow.main:app --port 5000 --reload")

if __name__ == "__main__":
    main()
