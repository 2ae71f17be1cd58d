from studyscout_app import create_app
from studyscout_app.search import get_search_manager

app = create_app()

if __name__ == '__main__':
    host = app.config.get('HOST', '127.0.0.1')
    port = app.config.get('PORT', 3000)
    debug = app.config.get('DEBUG', False)

    with app.app_context():
        manager = get_search_manager()
        print("=" * 60)
        print("  StudyScout v1.0")
        print("=" * 60)
        print(f"\n📚 Loaded {len(manager.providers)} providers:")
        configured = manager.get_status()
        for provider in manager.providers:
            status = "✅" if configured[provider.id] else "❌"
            print(f"   {status} {provider.name} ({provider.id})")
        print(f"\n🌐 Server is running on http://{host}:{port}")
        if debug:
            print("⚠️  Debug mode is ON - do not use in production!")
        print("=" * 60)

    app.run(host=host, port=port, debug=debug)
