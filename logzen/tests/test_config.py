# -*- coding: utf-8 -*-

import datetime

import pytest
from boltons.timeutils import UTC, LocalTZ

from logzen.config import (Config, parse_tz, split_formats, read_format_file,
                           ENV_FORMATS, ENV_TZ, ENV_ENCODING)


def test_parse_tz_names():
    assert parse_tz(None) is LocalTZ
    assert parse_tz('') is LocalTZ
    assert parse_tz('local') is LocalTZ
    assert parse_tz('LOCAL') is LocalTZ
    assert parse_tz('UTC') is UTC
    assert parse_tz('gmt') is UTC
    assert parse_tz('Z') is UTC


def test_parse_tz_offsets():
    dt = datetime.datetime(2023, 6, 1, 12)
    assert parse_tz('+05:30').utcoffset(dt) == datetime.timedelta(hours=5, minutes=30)
    assert parse_tz('-0400').utcoffset(dt) == datetime.timedelta(hours=-4)
    assert parse_tz(' +00:00 ').utcoffset(dt) == datetime.timedelta(0)

    with pytest.raises(ValueError):
        parse_tz('+24:00')
    with pytest.raises(ValueError):
        parse_tz('+05:60')


def test_parse_tz_iana():
    paris = parse_tz('Europe/Paris')
    summer = datetime.datetime(2023, 6, 1, 12, tzinfo=UTC).astimezone(paris)
    winter = datetime.datetime(2023, 1, 1, 12, tzinfo=UTC).astimezone(paris)
    assert summer.utcoffset() == datetime.timedelta(hours=2)
    assert winter.utcoffset() == datetime.timedelta(hours=1)

    with pytest.raises(ValueError):
        parse_tz('Not/A_Zone')
    with pytest.raises(ValueError):
        parse_tz('+5')


def test_split_formats():
    text = '%d/%m/%Y %H:%M\n\n# a comment\n  \n%H:%M:%S\n'
    assert split_formats(text) == ['%d/%m/%Y %H:%M', '%H:%M:%S']
    assert split_formats('') == []
    assert split_formats(None) == []


def test_read_format_file(tmp_path):
    path = tmp_path / 'formats.txt'
    path.write_text(u'# app formats\n%d.%m.%Y %H:%M\n', encoding='utf-8')
    assert read_format_file(str(path)) == ['%d.%m.%Y %H:%M']


def test_config_defaults():
    config = Config()
    assert config.formats == []
    assert config.tz == 'local'
    assert config.encoding == 'utf-8'
    assert config.use_defaults is True
    assert config.verbose is False
    assert config.get_tzinfo() is LocalTZ
    assert 'tz=' in repr(config)

    with pytest.raises(TypeError):
        Config(timezone='UTC')


def test_config_from_env():
    environ = {ENV_FORMATS: '%H:%M:%S\n%d/%m/%Y',
               ENV_TZ: 'UTC',
               ENV_ENCODING: 'latin-1'}
    config = Config.from_env(environ, formats=['%c'])
    assert config.formats == ['%c', '%H:%M:%S', '%d/%m/%Y']
    assert config.tz == 'UTC'
    assert config.encoding == 'latin-1'
    assert config.get_tzinfo() is UTC

    # explicit settings win over the environment
    config = Config.from_env(environ, tz='+01:00', encoding='utf-8',
                             use_defaults=False)
    assert config.tz == '+01:00'
    assert config.encoding == 'utf-8'
    assert config.use_defaults is False

    config = Config.from_env({})
    assert config.formats == []
    assert config.tz == 'local'
