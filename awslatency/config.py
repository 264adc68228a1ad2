"""Constants and configuration for awslatency."""

from awslatency import __version__

# Latency color thresholds (milliseconds)
FAST_THRESHOLD_MS = 20.0     # Green: <= 20ms
MEDIUM_THRESHOLD_MS = 100.0  # Yellow: <= 100ms
# Red: > 100ms

# Default probe settings
DEFAULT_TIMEOUT = 10.0  # seconds, applied to every probe independently
DEFAULT_COUNT = 1       # echo requests / handshakes per probe
DEFAULT_TCP_PORT = 443
ICMP_INTERVAL = 0.2  # seconds between echo requests when count > 1
DEADLINE_GRACE = 1.0  # seconds of slack on top of a probe's own timeouts
DEFAULT_CATALOG = "static"
DEFAULT_METHOD = "auto"

# Process exit codes
EXIT_OK = 0
EXIT_FATAL = 1
EXIT_UPDATE_AVAILABLE = 3
EXIT_INTERRUPTED = 130

# Package registry used for the update check
PACKAGE_NAME = "awslatency"
REGISTRY_URL = f"https://pypi.org/pypi/{PACKAGE_NAME}/json"
VERSION_CHECK_TIMEOUT = 5.0

# Public AWS directory used by the dynamic catalog
IP_RANGES_URL = "https://ip-ranges.amazonaws.com/ip-ranges.json"
IP_RANGES_SERVICE = "EC2"
CATALOG_FETCH_TIMEOUT = 10.0

# User agent for HTTP requests
USER_AGENT = f"{PACKAGE_NAME}/{__version__}"

# Static region table: (endpoint, region, city)
REGIONS = [
    ("ec2.cn-north-1.amazonaws.com.cn", "cn-north-1", "Beijing, China"),
    ("ec2.cn-northwest-1.amazonaws.com.cn", "cn-northwest-1", "Ningxia, China"),
    ("ec2.ap-south-1.amazonaws.com", "ap-south-1", "Mumbai, India"),
    ("ec2.eu-south-1.amazonaws.com", "eu-south-1", "Milan, Italy"),
    ("ec2.ap-south-2.amazonaws.com", "ap-south-2", "Hyderabad"),
    ("ec2.eu-south-2.amazonaws.com", "eu-south-2", "Spain"),
    ("ec2.me-central-1.amazonaws.com", "me-central-1", "UAE"),
    ("ec2.eu-central-2.amazonaws.com", "eu-central-2", "Zurich"),
    ("ec2.ap-southeast-3.amazonaws.com", "ap-southeast-3", "Jakarta"),
    ("ec2.ap-southeast-4.amazonaws.com", "ap-southeast-4", "Melbourne"),
    ("ec2.il-central-1.amazonaws.com", "il-central-1", "Tel Aviv"),
    ("ec2.ca-central-1.amazonaws.com", "ca-central-1", "Montreal, Canada"),
    ("ec2.eu-central-1.amazonaws.com", "eu-central-1", "Frankfurt, Germany"),
    ("ec2.us-west-1.amazonaws.com", "us-west-1", "N. California, USA"),
    ("ec2.us-west-2.amazonaws.com", "us-west-2", "Oregon, USA"),
    ("ec2.af-south-1.amazonaws.com", "af-south-1", "Cape Town, South Africa"),
    ("ec2.eu-north-1.amazonaws.com", "eu-north-1", "Stockholm, Sweden"),
    ("ec2.eu-west-3.amazonaws.com", "eu-west-3", "Paris, France"),
    ("ec2.eu-west-2.amazonaws.com", "eu-west-2", "London, United Kingdom"),
    ("eu-west-1.ec2.amazonaws.com", "eu-west-1", "Ireland"),
    ("ec2.ap-northeast-3.amazonaws.com", "ap-northeast-3", "Osaka, Japan"),
    ("ec2.ap-northeast-2.amazonaws.com", "ap-northeast-2", "Seoul, South Korea"),
    ("ec2.me-south-1.amazonaws.com", "me-south-1", "Bahrain"),
    ("ec2.ap-northeast-1.amazonaws.com", "ap-northeast-1", "Tokyo, Japan"),
    ("ec2.sa-east-1.amazonaws.com", "sa-east-1", "Sao Paulo, Brazil"),
    ("ec2.ap-east-1.amazonaws.com", "ap-east-1", "Hong Kong"),
    ("ec2.ap-southeast-1.amazonaws.com", "ap-southeast-1", "Singapore"),
    ("ec2.ap-southeast-2.amazonaws.com", "ap-southeast-2", "Sydney, Australia"),
    ("ec2.amazonaws.com", "us-east-1", "N. Virginia, USA"),
    ("ec2.us-east-2.amazonaws.com", "us-east-2", "Ohio, USA"),
]

# Regions the ip-ranges directory does not list under EC2; always appended
# to the dynamic catalog.
SUPPLEMENTAL_REGIONS = [
    ("ec2.cn-north-1.amazonaws.com.cn", "cn-north-1", "Beijing, China"),
    ("ec2.cn-northwest-1.amazonaws.com.cn", "cn-northwest-1", "Ningxia, China"),
]

# Endpoint hostnames that do not follow ec2.<region>.amazonaws.com
ENDPOINT_OVERRIDES = {
    "us-east-1": "ec2.amazonaws.com",
    "eu-west-1": "eu-west-1.ec2.amazonaws.com",
}
