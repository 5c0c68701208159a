"""Constants for the Dummy Operator."""

# API Group
API_GROUP = "interview.com"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_DUMMY = "Dummy"
PLURAL_DUMMY = "dummies"

# Labels
LABEL_NAME = "app.kubernetes.io/name"
LABEL_INSTANCE = "app.kubernetes.io/instance"
LABEL_VERSION = "app.kubernetes.io/version"
LABEL_PART_OF = "app.kubernetes.io/part-of"
LABEL_CREATED_BY = "app.kubernetes.io/created-by"

PART_OF = "custom-kubernetes-operator"
CREATED_BY = "controller-manager"

# Finalizers
# Declared for the Dummy kind but never registered: deletion relies on
# owner-reference garbage collection of the Deployment.
FINALIZER = f"{API_GROUP}/finalizer"

# Field Manager
FIELD_MANAGER = "dummy-operator"

# Operand
IMAGE_ENV_VAR = "DUMMY_IMAGE"
CONTAINER_NAME = "dummy"
RUN_AS_USER = 1001
DEFAULT_REPLICAS = 1

# Pod status phases
STATUS_RUNNING = "Running"
STATUS_PENDING = "Pending"

# Requeue
REQUEUE_AFTER_CREATE_SECONDS = 60.0
CONFLICT_RETRY_DELAY_SECONDS = 1.0

# Condition Types
COND_AVAILABLE = "Available"

# Condition Reasons
REASON_RECONCILING = "Reconciling"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_DEPLOYMENT_CREATED = "DeploymentCreated"
EVENT_REASON_STATUS_UPDATED = "StatusUpdated"
