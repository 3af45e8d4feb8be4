#!/usr/bin/env python3
"""Basic usage example"""

from multifile_logger import LoggerBuilder, Severity

def main():
    # logs/example.log gets everything,
    # logs/example.error.log and logs/example.debug.log get one level each
    logger = (LoggerBuilder()
        .with_name("example")
        .with_level(Severity.DEBUG)
        .with_multifile(
            "logs/example.log",
            separate=["error", "debug"],
            maxLines=10000,
            daily=True,
            maxDays=7,
        )
        .with_formatter("text")
        .with_async(True)
        .build())

    # Log messages
    logger.emergency("This is emergency")
    logger.alert("This is alert")
    logger.critical("This is critical")
    logger.error("This is error")
    logger.warning("This is warning")
    logger.notice("This is notice")
    logger.info("Application started")
    logger.debug("This is debug")

    # Flush and shutdown
    logger.flush()
    logger.shutdown()

if __name__ == "__main__":
    main()
