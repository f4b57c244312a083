SERVICE_NAME = "monitor"
