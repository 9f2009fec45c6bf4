# All API routes are in this one file
from flask import request, jsonify, Blueprint, current_app
from werkzeug.utils import secure_filename
import io

from .hashing import sha256_hex
from .imaging import ImageDecodeError, analyze_image

# This line creates the 'api' object that __init__.py is looking for
api = Blueprint('api', __name__)

INVALID_FILE_MESSAGE = 'Invalid file type. Please upload an image (e.g., PNG, BMP, JPEG).'
DECODE_FAILED_MESSAGE = 'Could not load the image for analysis.'
ANALYSIS_FAILED_MESSAGE = 'An error occurred during analysis.'


def allowed_file(filename, mimetype=None):
    # Any declared image/* type is accepted; Pillow decides whether it can read it
    if mimetype and mimetype.startswith('image/'):
        return True
    if '.' not in filename:
        return False
    ext = filename.rsplit('.', 1)[1].lower()
    return ext in current_app.config['ALLOWED_EXTENSIONS']

# Basic index and health endpoints for quick checks
@api.route('/', methods=['GET'])
def api_index():
    current_app.logger.debug('GET /api invoked for index')
    return jsonify({
        'name': 'LSB Steganalysis API',
        'version': 1,
        'endpoints': [
            'POST /api/stego/analysis',
            'GET  /api/health'
        ]
    }), 200

@api.route('/health', methods=['GET'])
def api_health():
    current_app.logger.debug('GET /api/health invoked')
    return jsonify({'status': 'ok'}), 200

@api.route('/stego/analysis', methods=['POST'])
def analyze_stego():
    current_app.logger.debug('POST /api/stego/analysis invoked')
    if 'file' not in request.files:
        return jsonify({'message': 'No file uploaded'}), 400
    file = request.files['file']
    if not file or file.filename == '':
        return jsonify({'message': 'No selected file'}), 400
    if not allowed_file(file.filename, file.mimetype):
        current_app.logger.warning(f'Rejected upload {file.filename!r} ({file.mimetype})')
        return jsonify({'message': INVALID_FILE_MESSAGE}), 400

    filename = secure_filename(file.filename)
    raw = file.read()
    digest = sha256_hex(raw)
    current_app.logger.debug(f'Analysis upload {filename} read: {len(raw)} bytes, sha256={digest}')

    try:
        decoded, result = analyze_image(io.BytesIO(raw))
    except ImageDecodeError:
        current_app.logger.warning(f'Could not decode {filename} for analysis', exc_info=True)
        return jsonify({'message': DECODE_FAILED_MESSAGE}), 422
    except Exception:
        current_app.logger.exception('Analysis failed')
        return jsonify({'message': ANALYSIS_FAILED_MESSAGE}), 500

    current_app.logger.debug(f'Analysis of {filename}: {result.status.value}, probability={result.probability}')
    body = result.to_dict()
    body.update({
        'filename': filename,
        'width': decoded.width,
        'height': decoded.height,
        'sha256': digest,
    })
    return jsonify(body), 200
