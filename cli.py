from journey.Keywords import Keywords
from journey.errors import JourneyError
from journey.services.config_loader import ensure_valid, load_asset_manifest, load_descriptor
from journey.services.latest import promote_latest
from journey.services.publisher import PublishPipeline
from journey.services.uploader import DEFAULT_MAX_WORKERS
from journey.utils.s3_handler import S3Handler
import argparse
import logging
import os
import sys

logger = logging.getLogger("journey")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# latest only copies an object that already exists, it needs no local files
LATEST_REQUIRED = ("name", "version", "bucket")


def _make_store(args) -> S3Handler:
    return S3Handler(region_name=args.region)


def _load(args):
    return load_descriptor(args.journey, bucket=args.bucket, cdn_domain=args.cdn_domain)


def publish(args):
    """
    validate journey.json, load the asset manifest and publish everything
    to {bucket}/{name}/{version}/
    """
    descriptor = ensure_valid(_load(args))
    assets = load_asset_manifest(descriptor.manifest_path)

    pipeline = PublishPipeline(
        descriptor,
        assets,
        _make_store(args),
        max_workers=args.max_workers,
        timeout=args.timeout,
    )
    result = pipeline.run()
    logger.info("Finished publishing all assets to S3 (%d uploaded, %d skipped)",
                len(result.report.uploaded), len(result.report.skipped))
    return result


def set_latest(args):
    descriptor = ensure_valid(_load(args), required=LATEST_REQUIRED)
    return promote_latest(descriptor, _make_store(args))


COMMANDS = {
    Keywords.PUBLISH.value: publish,
    Keywords.LATEST.value: set_latest,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='journey',
        description='Publish a versioned journey bundle (js/css build '
        '          artifacts plus metadata) to S3 and record its public'
        '          CDN urls in journey-urls.json'
    )
    parser.add_argument(
        '--journey',
        default='journey.json',
        help='Location of the journey.json file (default: journey.json)'
    )
    parser.add_argument(
        '--cmd',
        choices=list(COMMANDS),
        default=Keywords.PUBLISH.value,
        help='Command to invoke (default: publish)'
    )
    parser.add_argument(
        '--bucket',
        default=os.environ.get('JOURNEY_BUCKET'),
        help='AWS S3 bucket, overrides the one in journey.json (env: JOURNEY_BUCKET)'
    )
    parser.add_argument(
        '--cdn-domain',
        default=os.environ.get('JOURNEY_CDN_DOMAIN'),
        help='CDN url prefix, eg: https://changeme.cloudfront.net/ (env: JOURNEY_CDN_DOMAIN)'
    )
    parser.add_argument(
        '--region',
        default=None,
        help='AWS region (default: AWS_REGION, AWS_DEFAULT_REGION or us-east-1)'
    )
    parser.add_argument(
        '--max-workers',
        type=int,
        default=os.environ.get('JOURNEY_MAX_WORKERS', str(DEFAULT_MAX_WORKERS)),
        help=f'Maximum uploads in flight at once (default: {DEFAULT_MAX_WORKERS})'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=os.environ.get('JOURNEY_UPLOAD_TIMEOUT'),
        help='Report uploads still running after this many seconds as failed (default: no limit). '
             'Uploads already in flight are not interrupted and may still land before the process exits'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_workers <= 0:
        parser.error('--max-workers must be a positive integer')

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT
    )

    handler = COMMANDS[args.cmd]
    try:
        handler(args)
    except JourneyError as e:
        logger.error("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Aborted by user.")
        sys.exit(130)

    logger.info("Continue with your Journey!")


if __name__ == '__main__':
    main()
