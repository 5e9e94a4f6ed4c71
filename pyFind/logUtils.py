## @file logUtils.py
## @brief Logging setup for programs using pyFind
"""
Logging setup for programs using pyFind

The library itself only logs through 'pyFind.*' loggers and never
configures handlers; programs call LoggingFactory.Configure once at start.
"""

import logging
import logging.handlers
import os.path
import sys


class LoggingFactory:
    logFormat = "%(asctime)s [%(levelname)s '%(name)s' %(threadName)s] %(message)s"
    logSizeMB = 1
    numFiles = 2

    logLevelMap = {
        'fatal': logging.CRITICAL,
        'critical': logging.CRITICAL,
        'error': logging.ERROR,
        'warning': logging.WARNING,
        'info': logging.INFO,
        'debug': logging.DEBUG,
    }

    @staticmethod
    def LogLevel(name):
        """ Map a level name to its logging constant, debug if unknown. """
        return LoggingFactory.logLevelMap.get((name or '').lower(),
                                              logging.DEBUG)

    @staticmethod
    def Configure(logfile=None, loglevel='info'):
        """
        Attach a handler to the root logger.

        @type  logfile  : str
        @param logfile  : None logs to standard error, '-' to standard
                          output, anything else names a rotating log file
        @type  loglevel : str
        @param loglevel : one of fatal, critical, error, warning, info, debug
        @rtype          : logging.Handler
        """
        logLevel = LoggingFactory.LogLevel(loglevel)
        maxBytes = LoggingFactory.logSizeMB * 1024 * 1024
        backupCount = LoggingFactory.numFiles - 1

        rootLogger = logging.getLogger()
        rootLogger.setLevel(logLevel)

        if not logfile:
            handler = logging.StreamHandler(sys.stderr)
        elif logfile == '-':
            handler = logging.StreamHandler(sys.stdout)
        else:
            logFile = os.path.normpath(logfile)
            handler = logging.handlers.RotatingFileHandler(
                filename=logFile, maxBytes=maxBytes, backupCount=backupCount)

        handler.setLevel(logLevel)
        handler.setFormatter(logging.Formatter(LoggingFactory.logFormat))
        rootLogger.addHandler(handler)
        return handler
