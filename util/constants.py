class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    VALIDATE_API_KEY = V1 + "/validate-api-key"
    DOCUMENTS = V1 + "/documents"
    CURRENT_DOCUMENT = DOCUMENTS + "/current"
    DIMENSIONS = V1 + "/dimensions"
    CLASSIFY = V1 + "/classify"
    CLASSIFY_DIMENSION = CLASSIFY + "/{dimension}"
    QUERY = V1 + "/query"


NOT_REPORTED = "NR"
PDF_MEDIA_TYPE = "application/pdf"
