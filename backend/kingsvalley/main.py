from flask import Blueprint, current_app, jsonify, redirect, request

main = Blueprint('main', __name__)


@main.before_app_request
def force_https():
    # Behind the production proxy, plain-http requests are bounced to https
    if not current_app.config.get('PRODUCTION'):
        return None
    if request.headers.get('X-Forwarded-Proto') == 'https':
        return None
    return redirect(request.url.replace('http://', 'https://', 1), code=301)


@main.route('/')
def index():
    return jsonify({'message': "Welcome to the King's Valley game server!"})


@main.route('/api/health')
def health():
    rooms = current_app.extensions['rooms']
    return jsonify({'status': 'ok', 'rooms': rooms.room_count()})
