import click
import os
import sys
from typing import Optional

from . import __version__
from .cms_client import CMSClient
from .exceptions import CMSClientError, ConfigurationError
from .fetcher import ArticleFetcher
from .progress_tracker import ProgressTracker, Phase
from .utils import load_config, setup_logging, require_credentials, mask_secret

from generators.markdown import MdxGenerator, MarkdownTranscoder


@click.command()
@click.option('--output', '-o',
              type=click.Path(file_okay=False),
              help='Output directory (default: ./output)')
@click.option('--endpoint', '-e',
              help='microCMS endpoint name (default: articles)')
@click.option('--domain', '-d',
              help='microCMS service domain (overrides MICROCMS_SERVICE_DOMAIN)')
@click.option('--api-key', '-k',
              help='microCMS API key (overrides MICROCMS_API_KEY)')
@click.option('--config', '-c',
              type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
@click.option('--extension', '-x',
              help='Output file extension (default: mdx)')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose logging')
def export(output: Optional[str],
           endpoint: Optional[str],
           domain: Optional[str],
           api_key: Optional[str],
           config: Optional[str],
           extension: Optional[str],
           verbose: bool):
    """
    Fetch all articles from microCMS and write them as MDX files.
    """
    try:
        # Load configuration
        config_path = config or 'config.yaml'
        app_config = load_config(config_path)

        # Override config with CLI options
        if output:
            app_config['directories']['output_dir'] = output
        if endpoint:
            app_config['cms']['endpoint'] = endpoint
        if domain:
            app_config['cms']['service_domain'] = domain
        if api_key:
            app_config['cms']['api_key'] = api_key
        if extension:
            app_config['markdown']['extension'] = extension
        if verbose:
            app_config['logging']['level'] = 'DEBUG'

        # Setup logging
        logger = setup_logging(app_config['logging'])

        cms_config = app_config['cms']
        output_dir = app_config['directories']['output_dir']

        if verbose:
            logger.debug(
                f"Options: output={output_dir}, endpoint={cms_config['endpoint']}, "
                f"domain={cms_config.get('service_domain')}, "
                f"api_key={mask_secret(cms_config.get('api_key'))}, "
                f"extension={app_config['markdown']['extension']}"
            )

        try:
            require_credentials(app_config)
        except ConfigurationError as e:
            click.echo(f"❌ Error: {e}", err=True)
            sys.exit(1)

        click.echo(f"📁 Output directory: {output_dir}")
        click.echo(f"🔗 microCMS endpoint: {cms_config['endpoint']}")

        try:
            client = CMSClient(cms_config['service_domain'], cms_config['api_key'], app_config)
        except (CMSClientError, ConfigurationError) as e:
            click.echo(f"❌ Failed to initialize microCMS client: {e}", err=True)
            sys.exit(1)
        logger.info("microCMS client initialized")

        progress = ProgressTracker(verbose=verbose)
        try:
            progress.start_phase(Phase.FETCHING)
            fetcher = ArticleFetcher(
                client,
                endpoint=cms_config['endpoint'],
                limit=cms_config.get('page_limit', 100),
                verbose=verbose,
                progress=progress,
            )
            result = fetcher.fetch_all()
            progress.record_fetched(len(result))
            progress.finish_phase(f"Fetched {len(result)} articles")

            if result.partial:
                click.echo(f"⚠️  Fetching stopped early ({result.error}); "
                           f"continuing with {len(result)} articles")

            if not result.articles:
                click.echo("No articles found.")
                return

            progress.start_phase(Phase.CONVERTING, total=len(result))
            generator = MdxGenerator(app_config)
            generator.generate(result.articles, output_dir, progress=progress)
            progress.finish_phase()
            progress.show_summary(os.path.abspath(output_dir))
        finally:
            client.close()
            progress.cleanup()

    except KeyboardInterrupt:
        click.echo("\n⚠️  Export interrupted by user")
        sys.exit(1)
    except Exception as e:
        click.echo(f"❌ Error: {str(e)}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


@click.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--output', '-o',
              type=click.Path(dir_okay=False),
              help='Write Markdown to this file instead of stdout')
@click.option('--config', '-c',
              type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
def transcode(input_file, output: Optional[str], config: Optional[str]):
    """
    Convert a rich-text HTML fragment to Markdown.

    INPUT_FILE: HTML file to read (default: stdin)
    """
    app_config = load_config(config or 'config.yaml')
    markdown_config = app_config['markdown']
    transcoder = MarkdownTranscoder(options={
        'heading_style': markdown_config.get('heading_style', 'ATX'),
        'bullets': markdown_config.get('bullets', '-'),
    })

    markdown = transcoder.transcode(input_file.read())

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(markdown)
        click.echo(f"📝 Markdown written to {output}")
    else:
        click.echo(markdown)


@click.group()
@click.version_option(version=__version__, prog_name="cms2mdx")
def main():
    """cms2mdx - Export microCMS articles to MDX files with YAML frontmatter."""
    pass


main.add_command(export)
main.add_command(transcode)


if __name__ == '__main__':
    main()
