class ImporterInfrastructureError(Exception):
    pass


class DataSourceError(ImporterInfrastructureError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass
