# backend/app.py
from flask import Blueprint, Flask, current_app, request, jsonify
from flask_cors import CORS

from config import Config
from errors import InvalidPayloadError, LedgerError
from ledger import find_participant, participant_name
from payloads import (
    balance_to_json, expense_to_json, parse_balances, parse_event, parse_optional_id,
    parse_settlement, parse_timestamp, settlement_to_json, summary_to_json,
)
from settlement import compute_balances, compute_settlements, record_settlement
from summary import payment_link, summarize

api = Blueprint('api', __name__, url_prefix='/api')


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidPayloadError("Request body must be JSON")
    return data


# --- 1. HEALTH CHECK ROUTE ---
@api.route('', methods=['GET'])
def health_check():
    return jsonify({"status": "healthy", "message": "Backend is running!"})


# --- 2. CALCULATION ROUTES ---
@api.route('/balances', methods=['POST'])
def balances():
    participants, expenses = parse_event(_json_body())
    results = compute_balances(participants, expenses)
    return jsonify({"balances": [balance_to_json(b) for b in results]})


@api.route('/settlements', methods=['POST'])
def settlements():
    results = compute_settlements(parse_balances(_json_body()))
    return jsonify({"settlements": [settlement_to_json(s) for s in results]})


@api.route('/calculate', methods=['POST'])
def calculate():
    participants, expenses = parse_event(_json_body())
    current_app.logger.info(
        "Calculating %d participants, %d expenses", len(participants), len(expenses)
    )

    balance_list = compute_balances(participants, expenses)
    settlement_list = compute_settlements(balance_list)
    currency = current_app.config['CURRENCY']

    transfers = []
    for s in settlement_list:
        item = settlement_to_json(s)
        item['fromName'] = participant_name(participants, s.from_id)
        item['toName'] = participant_name(participants, s.to_id)
        item['paymentLink'] = payment_link(s, find_participant(participants, s.to_id), currency)
        transfers.append(item)

    return jsonify({
        "balances": [balance_to_json(b) for b in balance_list],
        "settlements": transfers,
        "summary": summary_to_json(summarize(participants, expenses)),
    })


# --- 3. SETTLE UP ---
# Returns the Payment record; the caller adds it to the event's expenses
@api.route('/settle', methods=['POST'])
def settle():
    data = _json_body()
    settlement = parse_settlement(data)
    # Participants are optional, only used to name the record
    participants, _ = parse_event({'participants': data.get('participants') or []})

    payment = record_settlement(
        settlement,
        participants,
        expense_id=parse_optional_id(data.get('id')),
        date=parse_timestamp(data.get('date')),
    )
    current_app.logger.info("Recorded settlement %s -> %s", payment.payer_id, payment.participant_ids[0])
    return jsonify(expense_to_json(payment)), 201


def handle_ledger_error(e):
    current_app.logger.warning("Rejected %s %s: %s", request.method, request.path, e)
    return jsonify({"error": str(e)}), 400


def handle_server_error(e):
    # Flask has already logged the traceback
    return jsonify({"error": "Internal server error"}), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})  # Allows the React frontend to talk to this backend

    app.register_blueprint(api)
    app.register_error_handler(LedgerError, handle_ledger_error)
    app.register_error_handler(500, handle_server_error)

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'], port=app.config['PORT'])
