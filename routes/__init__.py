"""routes 패키지 — Blueprint 중앙 등록"""


def register_blueprints(app):
    from routes.enquiry import enquiry_bp

    app.register_blueprint(enquiry_bp)
