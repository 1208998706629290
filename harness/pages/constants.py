"""Shared constants for UI scenarios."""

# Waits (seconds)
DEFAULT_WAIT_TIMEOUT = 30.0
POLL_INTERVAL = 0.5

# Literal UI text
PAGE_TITLE = "Utility Bill Pay (Demo UI)"
ADD_INVOICE_BUTTON = "Add Invoice"
LOAD_MORE_BUTTON = "Load more"
STATUS_FILTER_LABEL = "Status filter:"
CREATE_INVOICE_SUCCESS_MESSAGE = "Invoice created"
CREATE_INVOICE_DUPLICATE_ERROR_MESSAGE = "Invoice id already exists"
PAYMENT_CONFIRMED = "Payment confirmed"
PAYMENT_FAILED = "Payment failed (mock)"
INVALID_DATE = "Invalid Date"

# data-testid values
ADD_INVOICE_TEST_ID = "add-invoice"
STATUS_FILTER_TEST_ID = "filter-status"
LOAD_MORE_TEST_ID = "load-more"
TOAST_TEST_ID = "toast-message"
INVOICE_ROW_TEST_ID_PREFIX = "invoice-row-"

CREATE_MODAL_TEST_ID = "create-modal"
CREATE_ID_TEST_ID = "create-id"
CREATE_CUSTOMER_TEST_ID = "create-customer"
CREATE_AMOUNT_TEST_ID = "create-amount"
CREATE_CURRENCY_TEST_ID = "create-currency"
CREATE_DUE_TEST_ID = "create-due"
CREATE_SUBMIT_TEST_ID = "create-submit"

# Column of the due date in an invoice row (id, customer, due date, ...)
DUE_DATE_COLUMN_INDEX = 2

# Placeholder of a datetime-local style input that needs "YYYY-MM-DDTHH:mm"
DATETIME_LOCAL_PLACEHOLDER = "YYYY-MM-DDTHH:mm"
