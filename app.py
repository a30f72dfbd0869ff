from crew_attendance.main import create_app

app = create_app()

if __name__ == "__main__":
    # The reloader would start a second loader thread and backup scheduler.
    app.run(host="0.0.0.0", port=int(app.config.get("PORT", 3000)), debug=app.config["DEBUG"], use_reloader=False)
