"""
Local server for the recommendation API.

Starts uvicorn with auto-reload and prints the available endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Episode Recommender API")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Recommendation:   POST http://localhost:8000/recommendations")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommendations" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"query": "An episode Elon Musk would enjoy"}\'')
    print()
    print("=" * 60)
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "recommender.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
