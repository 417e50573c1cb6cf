"""
Quick demo script: run Reflectie-Buddy locally.

Usage:
    python scripts/run_demo.py
"""

import uvicorn


def main():
    print("=" * 60)
    print("  Reflectie-Buddy: Gibbs reflective cycle companion")
    print("=" * 60)
    print()
    print("Starting server at http://localhost:8000")
    print("Without an LLM_API_KEY the buddy answers with fallback questions.")
    print()
    print("API docs: http://localhost:8000/docs")
    print("Press Ctrl+C to stop.")
    print()

    uvicorn.run(
        "reflectbuddy.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
