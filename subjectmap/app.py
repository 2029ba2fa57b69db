import logging
from flask import Flask, Response, jsonify, request, abort, current_app
from flask_cors import CORS

from .config import setup_logging, SUBJECTMAP_API_TOKEN, SUBJECTMAP_CONFIG, SUBJECTMAP_LOG
from .engine import TranslationEngine
from .errors import ConfigError
from .koha import KohaClient
from .mapping import SubjectMap
from .records import parse_marcxml, records_to_marcxml

setup_logging()
logger = logging.getLogger("SubjectMap-API")

app = Flask(__name__)
CORS(app)

API_TOKEN = SUBJECTMAP_API_TOKEN
MARCXML = "application/marcxml+xml"


def get_engine():
    """Рушій створюється один раз на процес (конфігурація читається при першому запиті)."""
    engine = current_app.config.get("SUBJECTMAP_ENGINE")
    if engine is None:
        subject_map = SubjectMap.from_config(SUBJECTMAP_CONFIG)
        engine = TranslationEngine(subject_map, log=SUBJECTMAP_LOG)
        current_app.config["SUBJECTMAP_ENGINE"] = engine
        logger.info(f"⚙️ [Core] Engine ready with config {SUBJECTMAP_CONFIG}")
    return engine


def get_koha():
    koha = current_app.config.get("SUBJECTMAP_KOHA")
    if koha is None:
        koha = KohaClient()
        current_app.config["SUBJECTMAP_KOHA"] = koha
    return koha


@app.after_request
def add_cors_headers(response):
    response.headers['Access-Control-Allow-Origin'] = '*'
    response.headers['Access-Control-Allow-Headers'] = 'Content-Type, X-SUBJECTMAP-TOKEN, Authorization'
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    return response


@app.before_request
def check_security():
    if request.path.endswith('/health') or request.method == 'OPTIONS': return
    if not API_TOKEN:
        logger.error("⛔ SUBJECTMAP_API_TOKEN is not configured, rejecting request")
        abort(401, description="Server token not configured")
    if request.headers.get('X-SUBJECTMAP-TOKEN') != API_TOKEN:
        abort(401, description="Invalid Token")


@app.errorhandler(ConfigError)
def config_error(e):
    logger.error(f"❌ [Core] {e}")
    return jsonify({"status": "error", "message": str(e)}), 500


@app.route('/subjectmap/api/health', methods=['GET'])
def healthcheck(): return jsonify({"status": "ok"})


@app.route('/subjectmap/api/translate', methods=['POST'])
def translate_marcxml():
    """MARCXML у тілі запиту -> MARCXML колекція перекладених записів."""
    try:
        records = parse_marcxml(request.get_data())
    except Exception as e:
        logger.warning(f"⚠️ Could not parse MARCXML: {e}")
        return jsonify({"status": "error", "message": "Invalid MARCXML"}), 400

    engine = get_engine()
    translated = [new for new in map(engine.translate_record, records) if new is not None]
    logger.info(f"📨 Translate request: {len(records)} records, {len(translated)} translated")

    if not translated:
        return jsonify({"status": "not_translated", "records": len(records)}), 422
    return Response(records_to_marcxml(translated), mimetype=MARCXML)


@app.route('/subjectmap/api/biblios/<int:biblionumber>/translate', methods=['POST'])
def translate_biblio(biblionumber):
    """Перекладає рубрики запису Koha та записує результат назад."""
    koha = get_koha()
    record = koha.get_biblio_record(biblionumber)
    if record is None:
        return jsonify({"status": "not_found"}), 404

    new = get_engine().translate_record(record)
    if new is None:
        logger.info(f"⏭️ [Core] Nothing to translate for #{biblionumber}")
        return jsonify({"status": "not_translated"}), 422

    if not koha.update_biblio_record(biblionumber, new):
        return jsonify({"status": "error", "message": "Koha update failed"}), 502

    logger.info(f"✅ [Core] Biblio #{biblionumber} translated")
    return jsonify({"status": "success"})
