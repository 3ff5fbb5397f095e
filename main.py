import functions_framework
import json
import io
import logging
from flask import make_response
import pandas as pd

from realty_csv.config import LOG_FORMAT, LOG_LEVEL, EXPORT_SETTINGS
from realty_csv.data_loader import load_csv_text
from realty_csv.cleaner import clean_real_estate_csv
from realty_csv.parser import parse_real_estate_csv
from realty_csv.processing import configurations_to_dataframe, projects_to_dataframe, map_to_properties
from realty_csv.validator import validate_import, generate_validation_summary

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT
)
logger = logging.getLogger(__name__)


def _flag(request, name, default):
    return request.args.get(name, default).lower() == 'true'


@functions_framework.http
def import_listings_http(request):
    """
    HTTP Cloud Function to import an uploaded project sheet.
    Accepts CSV, TSV or Excel files and returns parsed projects and
    configurations in multiple formats.

    Query parameters:
    - format: json (default), csv, excel, properties
    - clean_only: true/false (default false)
    - include_validation: true/false (default true)
    - strict_header: true/false (default true)
    """

    # Handle CORS preflight requests
    if request.method == 'OPTIONS':
        headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'POST',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        }
        return ('', 204, headers)

    headers = {'Access-Control-Allow-Origin': '*'}
    indent = EXPORT_SETTINGS['json']['indent']

    try:
        # Parse query parameters
        export_format = request.args.get('format', 'json').lower()
        clean_only = _flag(request, 'clean_only', 'false')
        include_validation = _flag(request, 'include_validation', 'true')
        strict_header = _flag(request, 'strict_header', 'true')

        # Validate export format
        if export_format not in ['json', 'csv', 'excel', 'properties']:
            return (json.dumps({'error': f'Invalid format: {export_format}. Use json, csv, excel or properties'}), 400, headers)

        # Validate request has a file
        if 'file' not in request.files:
            return (json.dumps({'error': 'No file part in the request'}), 400, headers)

        file = request.files['file']
        if file.filename == '':
            return (json.dumps({'error': 'No file selected for uploading'}), 400, headers)

        logger.info(f"Processing file: {file.filename}")

        file_buffer = io.BytesIO(file.read())
        csv_text = load_csv_text(file_buffer, file.filename)

        # Review mode: return the cleaned sheet and its audit trail only
        if clean_only:
            cleaned = clean_real_estate_csv(csv_text, validate_header=strict_header)
            response = make_response(json.dumps(cleaned.to_dict(), indent=indent))
            response.headers['Content-Type'] = 'application/json; charset=utf-8'
            response.headers.update(headers)
            return response

        parsed = parse_real_estate_csv(csv_text, validate_header=strict_header)

        if not parsed.configurations:
            return (json.dumps({
                'error': 'No valid configurations found in file',
                'stats': parsed.stats.to_dict(),
                'issues': parsed.issues,
                'errors': [error.to_dict() for error in parsed.errors]
            }), 400, headers)

        validation_results = validate_import(parsed) if include_validation else None

        logger.info(f"Successfully parsed {len(parsed.configurations)} configurations "
                    f"from {len(parsed.projects)} projects.")

        if export_format == 'csv':
            csv_buffer = io.StringIO()
            configurations_to_dataframe(parsed).to_csv(csv_buffer, index=EXPORT_SETTINGS['csv']['index'])

            response = make_response(csv_buffer.getvalue())
            response.headers['Content-Type'] = 'text/csv; charset=utf-8'
            response.headers['Content-Disposition'] = 'attachment; filename=configurations.csv'
            response.headers.update(headers)
            return response

        elif export_format == 'properties':
            # Records ready for the property bulk-create endpoint
            response_data = {
                'properties': map_to_properties(parsed),
                'stats': parsed.stats.to_dict(),
            }
            if validation_results is not None:
                response_data['validation'] = validation_results

            response = make_response(json.dumps(response_data, indent=indent))
            response.headers['Content-Type'] = 'application/json; charset=utf-8'
            response.headers.update(headers)
            return response

        elif export_format == 'excel':
            excel_settings = EXPORT_SETTINGS['excel']
            sheets = excel_settings['sheets']
            excel_buffer = io.BytesIO()

            with pd.ExcelWriter(excel_buffer, engine=excel_settings['engine']) as writer:
                configurations_to_dataframe(parsed).to_excel(
                    writer, sheet_name=sheets['configurations'], index=excel_settings['include_index'])
                projects_to_dataframe(parsed).to_excel(
                    writer, sheet_name=sheets['projects'], index=excel_settings['include_index'])

                if validation_results is not None:
                    val_summary = pd.DataFrame([
                        {'Metric': 'Data Quality Score', 'Value': f"{validation_results['data_quality_score']}/100"},
                        {'Metric': 'Projects', 'Value': parsed.stats.projects_created},
                        {'Metric': 'Configurations', 'Value': parsed.stats.configurations_created},
                        {'Metric': 'Parse Errors', 'Value': parsed.stats.error_count}
                    ])
                    val_summary.to_excel(writer, sheet_name=sheets['validation'], index=False)

                    issue_rows = (
                        [('Error', e) for e in validation_results['errors']] +
                        [('Warning', w) for w in validation_results['warnings']] +
                        [('Skipped', i) for i in parsed.issues]
                    )
                    if issue_rows:
                        issues_df = pd.DataFrame(issue_rows, columns=['Type', 'Issue'])
                        issues_df.to_excel(writer, sheet_name=sheets['issues'], index=False)

            excel_buffer.seek(0)
            response = make_response(excel_buffer.getvalue())
            response.headers['Content-Type'] = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
            response.headers['Content-Disposition'] = 'attachment; filename=configurations.xlsx'
            response.headers.update(headers)
            return response

        else:  # JSON format (default)
            response_data = parsed.to_dict()
            if validation_results is not None:
                response_data['validation'] = validation_results
                response_data['summary'] = generate_validation_summary(validation_results)

            response = make_response(json.dumps(response_data, indent=indent))
            response.headers['Content-Type'] = 'application/json; charset=utf-8'
            response.headers.update(headers)
            return response

    except ValueError as ve:
        logger.error(f"Validation Error: {ve}", exc_info=True)
        return (json.dumps({'error': 'File format error', 'details': str(ve)}), 400, headers)
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        return (json.dumps({'error': 'Internal Server Error', 'details': str(e)}), 500, headers)
