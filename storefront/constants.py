# storefront/constants.py

# Conversation states: authentication
(
    WAITING_REGISTER_USER,
    WAITING_REGISTER_RUT,
    WAITING_REGISTER_EMAIL,
    WAITING_REGISTER_PASSWORD,
    WAITING_LOGIN_EMAIL,
    WAITING_LOGIN_PASSWORD,
) = range(6)

# Conversation states: add product
(
    WAITING_PRODUCT_NAME,
    WAITING_DESCRIPTION,
    WAITING_PRICE,
    WAITING_STOCK,
    WAITING_IMAGE,
    WAITING_CATEGORY,
    CONFIRM_PRODUCT,
) = range(10, 17)

# user_data keys
AUTH_SERVICE_KEY = "auth_service"
PRODUCT_VM_KEY = "product_vm"
FIXING_KEY = "fixing_draft"
DELETING_KEY = "deleting_product_id"
REGISTER_KEY = "register_data"

# Form validation messages
NAME_REQUIRED = "El nombre es obligatorio"
DESCRIPTION_REQUIRED = "La descripción es obligatoria"
PRICE_INVALID = "Ingrese un precio válido mayor a 0"
STOCK_INVALID = "Ingrese un stock válido (0 o mayor)"
IMAGE_REQUIRED = "Debes agregar una imagen o URL"

# Workflow messages
UNKNOWN_ERROR = "Error desconocido"
CREATE_FAILED = "Error al crear el producto"
IMAGE_UNAVAILABLE = "No se puede procesar la imagen seleccionada"
DELETE_FAILED = "No se pudo eliminar el producto"
DELETE_ERROR = "Error al eliminar el producto"
CATEGORIES_ERROR = "Error al cargar categorías: {detail}"

# Authentication messages
FILL_ALL_FIELDS = "Por favor, completa todos los campos"
AUTH_TIMEOUT = "La conexión está tardando demasiado. Verifica tu internet e intenta nuevamente."
EMAIL_IN_USE = "El correo ingresado ya esta registrado."
EMAIL_INVALID = "El formato del correo no es valido."
WEAK_PASSWORD = "La clave es demasiado debil. Usa al menos 6 caracteres."
NETWORK_ERROR = "Error de conexión. Verifica tu internet."
WRONG_CREDENTIALS = "Correo o clave incorrectos."
AUTH_UNKNOWN = "Error: {error}. Intenta nuevamente."

# Bot texts
NOT_SIGNED_IN = "🔒 Debes iniciar sesión para continuar."
OPERATION_CANCELLED = "❌ Operación cancelada."
